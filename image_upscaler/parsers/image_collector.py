"""Image file collection utilities."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from image_upscaler.models.upload import UploadCandidate

console = Console()

# Not every platform's mimetypes table knows WebP
mimetypes.add_type("image/webp", ".webp")


def collect_image_files(folder_path: Path) -> list[Path]:
    """
    Collect all files from a folder for upload.

    Unsupported files are kept so validation can report them.

    Args:
        folder_path: Path to the folder to scan

    Returns:
        list[Path]: List of file paths, sorted by name
    """
    if not folder_path.exists() or not folder_path.is_dir():
        console.print(f"[red]Warning: Folder does not exist or is not a directory: {escape(str(folder_path))}[/red]")
        return []

    files: list[Path] = [
        file_path
        for file_path in folder_path.iterdir()
        if file_path.is_file() and not file_path.name.startswith(".")
    ]

    # Sort files by name for consistent ordering
    files.sort(key=lambda x: x.name.lower())

    if not files:
        console.print(f"[yellow]Warning: No files found in folder: {escape(str(folder_path))}[/yellow]")

    return files


def guess_media_type(file_path: Path) -> str:
    """Guess the declared media type of a file from its name.

    Args:
        file_path: Path to the file

    Returns:
        MIME type string, or an empty string when unknown
    """
    return mimetypes.guess_type(file_path.name)[0] or ""


def collect_candidates(paths: list[Path]) -> list[UploadCandidate]:
    """
    Turn file and folder paths into upload candidates.

    Files are taken in the order given; folders contribute their files
    sorted by name. Missing paths are skipped with a warning.

    Args:
        paths: Files and/or folders supplied by the user

    Returns:
        list[UploadCandidate]: Candidates in input order
    """
    candidates: list[UploadCandidate] = []

    for path in paths:
        if path.is_dir():
            files = collect_image_files(path)
        elif path.is_file():
            files = [path]
        else:
            console.print(f"[yellow]Warning: Path does not exist: {escape(str(path))}[/yellow]")
            continue

        for file_path in files:
            try:
                size = file_path.stat().st_size
            except OSError as e:
                console.print(f"[red]Warning: Cannot read {escape(str(file_path))}: {escape(str(e))}[/red]")
                continue

            candidates.append(
                UploadCandidate(
                    name=file_path.name,
                    size=size,
                    media_type=guess_media_type(file_path),
                    path=file_path,
                )
            )

    return candidates
