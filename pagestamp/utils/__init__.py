"""Utility modules for common operations."""

from pagestamp.utils.paths import ensure_dir, publish_atomically, validate_input_file
from pagestamp.utils.units import (
    MM_PER_INCH,
    PU_PER_INCH,
    mm_to_pixels,
    mm_to_pu,
    pixels_to_mm,
    pixels_to_pu,
    pu_to_mm,
)

__all__ = [
    "MM_PER_INCH",
    "PU_PER_INCH",
    "ensure_dir",
    "mm_to_pixels",
    "mm_to_pu",
    "pixels_to_mm",
    "pixels_to_pu",
    "publish_atomically",
    "pu_to_mm",
    "validate_input_file",
]
