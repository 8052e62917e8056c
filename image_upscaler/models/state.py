"""Uploader state data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .upload import FileOutcome, ProcessedResult


class Scale(str, Enum):
    """Upscale quality selector."""

    X2 = "2x"
    X4 = "4x"

    @property
    def factor(self) -> int:
        return int(self.value.rstrip("x"))


@dataclass
class UploaderState:
    """Mutable state owned by the upscale processor."""

    loading: bool = False
    progress: float = 0.0
    results: list[ProcessedResult] = field(default_factory=list)
    outcomes: list[FileOutcome] = field(default_factory=list)
    error: str | None = None
    scale: Scale = Scale.X2
