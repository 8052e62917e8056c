#!/usr/bin/env python3
"""
Image Upscaler

A command-line tool for enhancing images with the RapidAPI AI Image Upscaler.
Validates the selected images, uploads them one at a time, shows a
before/after comparison and saves the enhanced results.

Usage:
    uv run main.py [images or folders ...]
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from image_upscaler.downloads.saver import save_result
from image_upscaler.models.events import FileProgress, PipelineEvent
from image_upscaler.models.state import Scale
from image_upscaler.models.upload import BatchResult
from image_upscaler.parsers.image_collector import collect_candidates
from image_upscaler.parsers.validator import validate_files
from image_upscaler.processors.upscale_processor import STAGE_WEIGHTS, UpscaleProcessor
from image_upscaler.uploaders.rapidapi import API_KEY_ENV, RapidApiUpscaler

# Load environment variables from .env file
_ = load_dotenv()

# Initialize Rich console for output
console = Console()


def validate_environment() -> bool:
    """
    Validate that required environment variables are set.

    Returns:
        bool: True if environment is valid, False otherwise
    """
    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        console.print(
            f"[red]Error: {API_KEY_ENV} not found in environment variables.[/red]"
        )
        console.print("Please create a .env file with your RapidAPI key:")
        console.print(f"{API_KEY_ENV}=your_api_key_here")
        return False

    console.print("[green]✓[/green] RapidAPI key loaded successfully")
    return True


def validate_output_directory(output_dir: Path) -> bool:
    """
    Validate and create output directory if needed.

    Args:
        output_dir: Path to the output directory

    Returns:
        bool: True if directory is valid and accessible
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        # Test write permissions
        test_file = output_dir / ".test_write"
        _ = test_file.write_text("test")
        test_file.unlink()

        console.print(f"[green]✓[/green] Output directory ready: {escape(str(output_dir))}")
        return True

    except PermissionError:
        console.print(f"[red]Error: No write permission for output directory: {escape(str(output_dir))}[/red]")
        return False
    except OSError as e:
        console.print(f"[red]Error: Cannot access output directory {escape(str(output_dir))}: {escape(str(e))}[/red]")
        return False


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Enhance images with the AI Image Upscaler API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run main.py photo.png                 # Enhance one image
  uv run main.py ./photos --scale 4x -y    # Enhance a folder and save everything
  uv run main.py ./photos --dry-run        # Validate without uploading
        """
    )

    _ = parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Images or folders to enhance (prompts when omitted)"
    )

    _ = parser.add_argument(
        "--scale",
        choices=[scale.value for scale in Scale],
        default=Scale.X2.value,
        help="Upscaling quality (default: 2x)"
    )

    _ = parser.add_argument(
        "--send-scale",
        action="store_true",
        help="Send the quality selector to the API with each image"
    )

    _ = parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("upscaled"),
        help="Directory for enhanced images (default: upscaled)"
    )

    _ = parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Save every enhanced image without asking"
    )

    _ = parser.add_argument(
        "--timeout",
        type=float,
        default=300,
        help="Seconds to wait for each API request (default: 300)"
    )

    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the images and show what would be uploaded"
    )

    _ = parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging"
    )

    return parser.parse_args(argv)


def prompt_for_paths() -> list[Path]:
    """Ask the user for an image or folder path."""
    console.print("\n[blue]No images specified.[/blue]")
    path_input = console.input(
        "[bold]Enter path to an image or folder (or press Enter for current directory): [/bold]"
    ).strip()
    return [Path(path_input) if path_input else Path.cwd()]


def download_results(
    processor: UpscaleProcessor, output_dir: Path, save_all: bool
) -> int:
    """Save enhanced images, asking per image unless save_all is set.

    Returns:
        Number of files written
    """
    saved = 0
    for result in processor.state.results:
        if not save_all and not processor.progress_tracker.confirm_download(result.name):
            continue
        try:
            target = save_result(result, output_dir)
        except (OSError, ValueError) as e:
            processor.progress_tracker.display_error(
                f"Could not save {result.name}: {e}", e
            )
            continue
        processor.progress_tracker.display_success(f"Saved {target}")
        saved += 1
    return saved


def display_summary(processor: UpscaleProcessor, batch: BatchResult, start_time: float) -> None:
    """Display final processing summary.

    Args:
        processor: The upscale processor instance
        batch: Outcomes of the processed batch
        start_time: Processing start time for duration calculation
    """
    duration = time.time() - start_time
    processor.progress_tracker.display_upload_summary(batch)
    console.print(f"[yellow]Processing time:[/yellow] {duration:.1f} seconds")

    attempted = processor.processed_files + processor.failed_files
    if attempted > 0:
        success_rate = (processor.processed_files / attempted) * 100
        console.print(f"[green]Success rate:[/green] {success_rate:.1f}%")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the image upscaler."""
    start_time = time.time()

    console.print("[bold magenta]AI Image Upscaler[/bold magenta]")
    console.print("Transform your images with the AI Image Upscaler API...\n")

    args = parse_arguments(argv)

    verbose_mode: bool = args.verbose
    if verbose_mode:
        console.print("[dim]Verbose mode enabled[/dim]")

    paths: list[Path] = args.paths or prompt_for_paths()
    candidates = collect_candidates(paths)
    if not candidates:
        console.print("[red]Error: No files found to process[/red]")
        sys.exit(1)

    if args.dry_run:
        console.print("[yellow]DRY RUN MODE - No uploads will be performed[/yellow]\n")
        validation = validate_files(candidates)
        if validation.error_message:
            console.print(f"[red]{escape(validation.error_message)}[/red]")
        console.print(f"[blue]Would enhance {len(validation.accepted)} image(s)[/blue]")
        for candidate in validation.accepted:
            console.print(f"  - {escape(candidate.name)} ({candidate.size / 1024:.1f}KB, {candidate.media_type})")
        sys.exit(0 if validation.accepted else 1)

    if not validate_environment():
        sys.exit(1)

    output_dir: Path = args.output_dir
    if not validate_output_directory(output_dir):
        sys.exit(1)

    try:
        processor = UpscaleProcessor(
            uploader=RapidApiUpscaler(timeout=args.timeout),
            console=console,
            scale=Scale(args.scale),
            send_scale=args.send_scale,
        )
    except ValueError as e:
        console.print(f"[red]Failed to initialize processor: {escape(str(e))}[/red]")
        sys.exit(1)

    if verbose_mode:
        def log_event(event: PipelineEvent) -> None:
            if isinstance(event, FileProgress) and event.stage == STAGE_WEIGHTS[-1]:
                console.print(f"[dim]✓ {escape(event.name or '')} ({event.progress:.0f}%)[/dim]")

        processor.subscribe(log_event)

    batch = BatchResult()
    try:
        batch = processor.process_files(candidates)
        if not batch.outcomes:
            console.print("[red]No valid images to process.[/red]")
            sys.exit(1)

        processor.progress_tracker.display_comparison(batch.results)
        if batch.results:
            _ = download_results(processor, output_dir, args.yes)

        display_summary(processor, batch, start_time)
        console.print("\n[green]Processing completed![/green]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Processing interrupted by user.[/yellow]")
        display_summary(processor, batch, start_time)
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]Critical error during processing: {escape(str(e))}[/red]")
        if verbose_mode:
            import traceback
            console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
