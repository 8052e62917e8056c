"""Input collection and validation utilities."""

from .image_collector import collect_candidates, collect_image_files
from .validator import validate_files

__all__ = ["collect_candidates", "collect_image_files", "validate_files"]
