"""Conversions between the coordinate spaces used for stamp placement.

Four spaces are in play:

- page space (PU): the document's own unit, 72 per inch
- physical millimetres (MM): what users type and what placement is stored in
- stamp pixels at the stamp's resolved density
- canvas pixels at a render target's density (preview or page canvas)

Every conversion goes through inches so that no two call sites derive their
own factors. All functions are total; a density must be finite and positive.
"""

from __future__ import annotations

import math

MM_PER_INCH = 25.4
PU_PER_INCH = 72.0


def _check_density(density: float) -> None:
    assert math.isfinite(density) and density > 0, f"density must be > 0, got {density!r}"


def mm_to_pu(mm: float) -> float:
    """Millimetres to page-space units."""
    return mm / MM_PER_INCH * PU_PER_INCH


def pu_to_mm(pu: float) -> float:
    """Page-space units to millimetres."""
    return pu / PU_PER_INCH * MM_PER_INCH


def mm_to_pixels(mm: float, density: float) -> float:
    """Millimetres to pixels at ``density`` pixels per inch."""
    _check_density(density)
    return mm / MM_PER_INCH * density


def pixels_to_mm(px: float, density: float) -> float:
    """Pixels at ``density`` pixels per inch to millimetres."""
    _check_density(density)
    return px * MM_PER_INCH / density


def pixels_to_pu(px: float, density: float) -> float:
    """Pixels at ``density`` pixels per inch to page-space units."""
    _check_density(density)
    return px * PU_PER_INCH / density
