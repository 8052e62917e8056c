"""Decode and save upscaled images."""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import Path
from typing import TypedDict

from image_upscaler.models.upload import ProcessedResult

DATA_URI_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")


class ComparisonRow(TypedDict):
    """Type definition for one before/after comparison row."""

    name: str
    original_bytes: int
    upscaled_bytes: int
    ratio: float


def decode_result(data: str) -> bytes:
    """Decode a base64 image, with or without a data URI prefix.

    Whitespace inside the payload (e.g. MIME line wrapping) is skipped.

    Raises:
        ValueError: If the payload is not valid base64
    """
    payload = DATA_URI_PREFIX.sub("", "".join(data.split()))
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def unique_target(output_dir: Path, name: str) -> Path:
    """First free path for name in output_dir, numbering duplicates."""
    target = output_dir / name
    counter = 1
    while target.exists():
        target = output_dir / f"{Path(name).stem} ({counter}){Path(name).suffix}"
        counter += 1
    return target


def save_result(result: ProcessedResult, output_dir: Path) -> Path:
    """Write the upscaled image of a result to the output directory.

    The saved file is named after the original upload. An existing file is
    never overwritten; a " (1)", " (2)", ... suffix is added instead.

    Args:
        result: Processed result to save
        output_dir: Directory to write into (created if missing)

    Returns:
        Path of the written file

    Raises:
        ValueError: If the upscaled payload cannot be decoded
        OSError: If the file cannot be written
    """
    content = decode_result(result.upscaled)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Only the base name, never a path from the upload
    target = unique_target(output_dir, Path(result.name).name)
    _ = target.write_bytes(content)
    return target


def _decoded_size(data: str) -> int:
    try:
        return len(decode_result(data))
    except ValueError:
        return 0


def build_comparison_rows(results: list[ProcessedResult]) -> list[ComparisonRow]:
    """Summarize original and upscaled sizes for each result.

    Undecodable payloads count as zero bytes.
    """
    rows: list[ComparisonRow] = []
    for result in results:
        original_bytes = _decoded_size(result.original)
        upscaled_bytes = _decoded_size(result.upscaled)
        rows.append(
            {
                "name": result.name,
                "original_bytes": original_bytes,
                "upscaled_bytes": upscaled_bytes,
                "ratio": upscaled_bytes / original_bytes if original_bytes else 0.0,
            }
        )
    return rows
