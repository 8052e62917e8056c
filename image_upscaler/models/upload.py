"""Upload candidate and result data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class UploadCandidate:
    """A user-supplied image file awaiting validation."""

    name: str
    size: int
    media_type: str
    path: Path


@dataclass
class ValidationOutcome:
    """Accepted candidates and rejection messages, both in input order."""

    accepted: list[UploadCandidate] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)

    @property
    def error_message(self) -> str | None:
        """Aggregate rejection message block, or None if nothing was rejected."""
        if not self.rejected:
            return None
        return "\n".join(self.rejected)


@dataclass
class ProcessedResult:
    """Original and upscaled encodings of one successfully processed image."""

    name: str
    original: str
    upscaled: str


@dataclass
class FileOutcome:
    """Result of processing a single accepted file.

    Exactly one of ``result`` or ``error`` is set.
    """

    name: str
    index: int
    result: ProcessedResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.result is not None


@dataclass
class BatchResult:
    """Outcomes for every accepted file of a batch, in input order."""

    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def results(self) -> list[ProcessedResult]:
        return [o.result for o in self.outcomes if o.result is not None]

    @property
    def failures(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.success]
