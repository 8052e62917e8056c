"""Data models for the image upscaler."""

from .events import BatchComplete, FileProgress, PipelineEvent, ValidationFailed
from .state import Scale, UploaderState
from .upload import (
    BatchResult,
    FileOutcome,
    ProcessedResult,
    UploadCandidate,
    ValidationOutcome,
)

__all__ = [
    "BatchComplete",
    "BatchResult",
    "FileOutcome",
    "FileProgress",
    "PipelineEvent",
    "ProcessedResult",
    "Scale",
    "UploadCandidate",
    "UploaderState",
    "ValidationFailed",
    "ValidationOutcome",
]
