"""HTTP clients for image upscaling services."""

from .rapidapi import (
    RapidApiUpscaler,
    UpscaleRequestError,
    UpscaleResponseError,
)

__all__ = ["RapidApiUpscaler", "UpscaleRequestError", "UpscaleResponseError"]
