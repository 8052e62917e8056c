"""Progress tracking with Rich progress bars."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from image_upscaler.downloads.saver import build_comparison_rows
from image_upscaler.models.upload import BatchResult, ProcessedResult


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f}MB"
    return f"{size / 1024:.1f}KB"


@final
class ProgressTracker:
    """Displays upscale progress, results and status messages."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress tracker.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    @contextmanager
    def track_batch(self, total_files: int) -> Iterator[BatchProgressContext]:
        """Context manager for tracking overall batch progress.

        Args:
            total_files: Number of files in the batch

        Yields:
            Context for updating the batch percentage
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task_id = progress.add_task(
                f"Enhancing {total_files} image(s)...", total=100
            )
            yield BatchProgressContext(progress, task_id)

    def confirm_download(self, name: str) -> bool:
        """Ask the user whether to save an upscaled image.

        Args:
            name: Name of the image

        Returns:
            True if user confirms the download
        """
        response = self.console.input(
            f"[bold]Download enhanced {escape(name)}? (y/N): [/bold]"
        )
        return response.lower().strip() in ("y", "yes")

    def display_validation_errors(self, message: str) -> None:
        """Display the aggregate validation error block.

        Args:
            message: Newline-separated rejection messages
        """
        self.console.print(
            Panel(
                Text(message),
                title="Validation Error",
                title_align="left",
                border_style="red",
                style="red",
            )
        )

    def display_comparison(self, results: list[ProcessedResult]) -> None:
        """Display a before/after comparison of processed images.

        Args:
            results: Successfully processed images
        """
        if not results:
            return

        table = Table(title="Before & After Comparison")
        table.add_column("#", style="dim")
        table.add_column("Image", style="cyan")
        table.add_column("Original", style="red")
        table.add_column("Enhanced", style="green")
        table.add_column("Ratio", style="magenta")

        for i, row in enumerate(build_comparison_rows(results), 1):
            table.add_row(
                str(i),
                Text(row["name"]),
                _format_size(row["original_bytes"]),
                _format_size(row["upscaled_bytes"]),
                f"{row['ratio']:.2f}x",
            )

        self.console.print("\n")
        self.console.print(table)

    def display_upload_summary(self, batch: BatchResult) -> None:
        """Display a summary of the batch, listing failed files.

        Args:
            batch: Outcomes of the processed batch
        """
        table = Table(title="Upscale Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="green")

        table.add_row("Images Enhanced", str(len(batch.results)))
        table.add_row("Images Failed", str(len(batch.failures)))

        self.console.print("\n")
        self.console.print(table)

        for failure in batch.failures:
            self.console.print(f"[red]✗ {escape(failure.name)}:[/red] [dim]{escape(failure.error or '')}[/dim]")

    def display_error(self, message: str, exception: Exception | None = None) -> None:
        """Display an error message with optional exception details.

        Args:
            message: Error message to display
            exception: Optional exception for additional context
        """
        self.console.print(f"[red]Error: {escape(message)}[/red]")
        if exception:
            self.console.print(f"[dim]Details: {escape(str(exception))}[/dim]")

    def display_warning(self, message: str) -> None:
        """Display a warning message.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]Warning: {escape(message)}[/yellow]")

    def display_success(self, message: str) -> None:
        """Display a success message.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]Success: {escape(message)}[/green]")

    def display_info(self, message: str) -> None:
        """Display an info message.

        Args:
            message: Info message to display
        """
        self.console.print(f"[blue]Info: {escape(message)}[/blue]")


@final
class BatchProgressContext:
    """Context for tracking batch upscale progress."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        """Initialize the context.

        Args:
            progress: Rich Progress instance
            task_id: Task ID for the progress bar
        """
        self.progress = progress
        self.task_id = task_id

    def set_progress(self, completed: float, description: str | None = None) -> None:
        """Set the batch percentage.

        Args:
            completed: Percentage in [0, 100]
            description: Optional description update
        """
        self.progress.update(self.task_id, completed=completed, description=description)
