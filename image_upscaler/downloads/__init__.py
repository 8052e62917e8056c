"""Saving upscaled results to disk."""

from .saver import build_comparison_rows, decode_result, save_result

__all__ = ["build_comparison_rows", "decode_result", "save_result"]
