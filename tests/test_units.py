"""Tests for coordinate-space conversions."""

from __future__ import annotations

import math

import pytest

from pagestamp.utils.units import (
    mm_to_pixels,
    mm_to_pu,
    pixels_to_mm,
    pixels_to_pu,
    pu_to_mm,
)


def test_one_inch_in_every_space() -> None:
    assert mm_to_pu(25.4) == pytest.approx(72.0)
    assert pu_to_mm(72.0) == pytest.approx(25.4)
    assert mm_to_pixels(25.4, 300.0) == pytest.approx(300.0)
    assert pixels_to_mm(300.0, 300.0) == pytest.approx(25.4)
    assert pixels_to_pu(300.0, 300.0) == pytest.approx(72.0)


@pytest.mark.parametrize("mm", [0.0, 1.0, 12.7, 210.0, -5.5])
@pytest.mark.parametrize("density", [1.0, 72.0, 96.0, 600.0])
def test_mm_pixel_round_trip(mm: float, density: float) -> None:
    assert math.isclose(pixels_to_mm(mm_to_pixels(mm, density), density), mm, abs_tol=1e-9)


def test_a4_width_in_page_units() -> None:
    assert mm_to_pu(210.0) == pytest.approx(595.2756, rel=1e-6)


@pytest.mark.parametrize("density", [0.0, -72.0, float("nan"), float("inf")])
def test_invalid_density_is_a_programming_error(density: float) -> None:
    with pytest.raises(AssertionError):
        mm_to_pixels(10.0, density)
    with pytest.raises(AssertionError):
        pixels_to_pu(10.0, density)
