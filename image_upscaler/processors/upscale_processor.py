"""Main upscale processing orchestration."""

from __future__ import annotations

import base64
from collections.abc import Callable, Sequence
from typing import final

from rich.console import Console
from rich.markup import escape

from image_upscaler.models.events import (
    BatchComplete,
    FileProgress,
    PipelineEvent,
    ValidationFailed,
)
from image_upscaler.models.state import Scale, UploaderState
from image_upscaler.models.upload import (
    BatchResult,
    FileOutcome,
    ProcessedResult,
    UploadCandidate,
)
from image_upscaler.parsers.validator import validate_files
from image_upscaler.progress.tracker import BatchProgressContext, ProgressTracker
from image_upscaler.uploaders.rapidapi import RapidApiUpscaler

# Share of each file's slice of the progress range after read, prepare,
# submit and finalize
STAGE_WEIGHTS = (20, 40, 70, 100)

EventListener = Callable[[PipelineEvent], None]


def compute_progress(index: int, total: int, stage_weight: int) -> float:
    """Batch progress after a stage of one file.

    Args:
        index: 0-based position of the file in the batch
        total: Number of files in the batch
        stage_weight: One of STAGE_WEIGHTS

    Returns:
        Percentage in [0, 100]
    """
    return (index / total) * 100 + stage_weight / total


@final
class UpscaleProcessor:
    """Validates image batches and upscales them one file at a time."""

    def __init__(
        self,
        uploader: RapidApiUpscaler | None = None,
        console: Console | None = None,
        scale: Scale = Scale.X2,
        send_scale: bool = False,
    ) -> None:
        """Initialize the upscale processor.

        Args:
            uploader: Upscaler API client. If None, one is built from the environment.
            console: Rich console instance
            scale: Quality selector kept in state
            send_scale: Transmit the quality selector with each request
        """
        self.console = console or Console()
        self.progress_tracker = ProgressTracker(self.console)
        self.uploader = uploader or RapidApiUpscaler()
        self.send_scale = send_scale
        self.state = UploaderState(scale=scale)
        self._listeners: list[EventListener] = []

        # Processing statistics
        self.processed_files = 0
        self.failed_files = 0

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback for pipeline events."""
        self._listeners.append(listener)

    def _emit(self, event: PipelineEvent) -> None:
        for listener in self._listeners:
            listener(event)

    def set_scale(self, scale: Scale) -> None:
        self.state.scale = scale

    def dismiss_error(self) -> None:
        """Clear the validation error block."""
        self.state.error = None

    def _publish_progress(
        self,
        progress: float,
        bar: BatchProgressContext | None = None,
        name: str | None = None,
        index: int = -1,
        total: int = 0,
        stage: int = 0,
    ) -> None:
        self.state.progress = progress
        if bar is not None:
            bar.set_progress(progress, f"Enhancing {escape(name)}..." if name else None)
        self._emit(FileProgress(name, index, total, stage, progress))

    def process_files(self, candidates: Sequence[UploadCandidate]) -> BatchResult:
        """Validate a batch and upscale the accepted files in order.

        Per-file failures are recorded as failed outcomes and never raised.

        Args:
            candidates: Files selected by the user, in order

        Returns:
            BatchResult with one outcome per accepted file
        """
        self.state.error = None
        self.state.results = []
        self.state.outcomes = []

        validation = validate_files(candidates)
        if validation.error_message is not None:
            self.state.error = validation.error_message
            self.progress_tracker.display_validation_errors(validation.error_message)
            self._emit(ValidationFailed(list(validation.rejected)))
            if not validation.accepted:
                return BatchResult()

        accepted = validation.accepted
        total = len(accepted)
        batch = BatchResult()

        self.state.loading = True
        self._publish_progress(0.0)

        try:
            with self.progress_tracker.track_batch(total) as bar:
                for i, candidate in enumerate(accepted):
                    outcome = self._process_single_file(candidate, i, total, bar)
                    batch.outcomes.append(outcome)
                    if outcome.success:
                        self.processed_files += 1
                    else:
                        self.failed_files += 1
        finally:
            self.state.results = batch.results
            self.state.outcomes = list(batch.outcomes)
            self.state.loading = False
            self._publish_progress(0.0)

        self._emit(BatchComplete(batch))
        return batch

    def _process_single_file(
        self,
        candidate: UploadCandidate,
        index: int,
        total: int,
        bar: BatchProgressContext,
    ) -> FileOutcome:
        """Read, submit and collect the result for one file.

        Args:
            candidate: File to upscale
            index: 0-based position in the batch
            total: Number of files in the batch
            bar: Progress bar context

        Returns:
            FileOutcome holding either the result or the error
        """
        read_weight, prepare_weight, submit_weight, finalize_weight = STAGE_WEIGHTS

        def advance(weight: int) -> None:
            self._publish_progress(
                compute_progress(index, total, weight),
                bar,
                candidate.name,
                index,
                total,
                weight,
            )

        def failed(e: Exception) -> FileOutcome:
            self.progress_tracker.display_error(
                f"Failed to process {candidate.name}: {e}", e
            )
            return FileOutcome(name=candidate.name, index=index, error=str(e))

        # Only the file's own work is guarded; listener errors propagate
        advance(read_weight)
        try:
            content = candidate.path.read_bytes()
            original = base64.b64encode(content).decode("ascii")
        except Exception as e:
            return failed(e)

        advance(prepare_weight)
        try:
            payload = self.uploader.build_payload(
                candidate.name,
                content,
                candidate.media_type,
                self.state.scale if self.send_scale else None,
            )
        except Exception as e:
            return failed(e)

        advance(submit_weight)
        try:
            upscaled = self.uploader.upscale(payload)
        except Exception as e:
            return failed(e)

        advance(finalize_weight)
        return FileOutcome(
            name=candidate.name,
            index=index,
            result=ProcessedResult(
                name=candidate.name, original=original, upscaled=upscaled
            ),
        )
