"""Batch processing orchestration."""

from .upscale_processor import STAGE_WEIGHTS, UpscaleProcessor, compute_progress

__all__ = ["STAGE_WEIGHTS", "UpscaleProcessor", "compute_progress"]
