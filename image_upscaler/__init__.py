"""Command-line image upscaler backed by the RapidAPI AI Image Upscaler."""

__version__ = "0.1.0"
