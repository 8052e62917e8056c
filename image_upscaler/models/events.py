"""Events emitted by the upscale processor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .upload import BatchResult


@dataclass(frozen=True)
class ValidationFailed:
    """Some candidates of a batch were rejected."""

    messages: list[str]


@dataclass(frozen=True)
class FileProgress:
    """Progress update for the whole batch.

    ``index`` and ``stage`` are -1 and 0 for the batch start and end resets.
    """

    name: str | None
    index: int
    total: int
    stage: int
    progress: float


@dataclass(frozen=True)
class BatchComplete:
    """All accepted files of a batch were attempted."""

    batch: BatchResult


PipelineEvent = Union[ValidationFailed, FileProgress, BatchComplete]
