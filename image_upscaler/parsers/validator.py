"""Format and size validation for upload candidates."""

from __future__ import annotations

from collections.abc import Iterable

from image_upscaler.models.upload import UploadCandidate, ValidationOutcome

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
ALLOWED_MEDIA_TYPES = ("image/png", "image/jpeg", "image/jpg", "image/webp")


def validate_files(candidates: Iterable[UploadCandidate]) -> ValidationOutcome:
    """
    Partition candidates into accepted files and rejection messages.

    The media type is checked before the size; a file with a disallowed
    type gets only the format message.

    Args:
        candidates: Files to check, in input order

    Returns:
        ValidationOutcome: Accepted candidates and rejection messages
    """
    outcome = ValidationOutcome()

    for candidate in candidates:
        if candidate.media_type not in ALLOWED_MEDIA_TYPES:
            outcome.rejected.append(
                f"{candidate.name}: Invalid format. Only PNG, JPG, JPEG, and WebP are supported."
            )
            continue

        if candidate.size > MAX_FILE_SIZE:
            size_mb = candidate.size / (1024 * 1024)
            outcome.rejected.append(
                f"{candidate.name}: File too large ({size_mb:.2f}MB). Maximum size is 5MB."
            )
            continue

        outcome.accepted.append(candidate)

    return outcome
