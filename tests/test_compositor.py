"""Tests for the placement transform and preview/page parity."""

from __future__ import annotations

import pytest

from pagestamp.app.compositor import (
    AffineTransform,
    RenderTarget,
    compute_transform,
    stamp_bounds,
)
from pagestamp.app.placement import PlacementSnapshot
from pagestamp.app.resolution import ResolutionSource, StampResolution
from pagestamp.utils.units import pixels_to_pu


def _resolution(density: float) -> StampResolution:
    return StampResolution(density=density, source=ResolutionSource.EXPLICIT)


def test_transform_scales_by_density_ratio_and_translates() -> None:
    snapshot = PlacementSnapshot(x_mm=25.4, y_mm=50.8, scale=0.5)
    transform = compute_transform(snapshot, RenderTarget.preview(100.0), _resolution(200.0))

    assert transform.a == pytest.approx(0.25)
    assert transform.d == pytest.approx(0.25)
    assert transform.b == transform.c == 0.0
    assert transform.apply(0.0, 0.0) == pytest.approx((100.0, 200.0))
    assert transform.apply(400.0, 400.0) == pytest.approx((200.0, 300.0))


def test_target_origin_shifts_stamp() -> None:
    snapshot = PlacementSnapshot(x_mm=25.4, y_mm=0.0, scale=1.0)
    target = RenderTarget(density=72.0, origin_x=30.0, origin_y=40.0)

    bounds = stamp_bounds(snapshot, target, _resolution(72.0), 72, 36)

    assert bounds == pytest.approx((102.0, 40.0, 174.0, 76.0))


def test_page_canvas_is_visible_page_in_page_units() -> None:
    snapshot = PlacementSnapshot(x_mm=25.4, y_mm=25.4, scale=1.0)

    bounds = stamp_bounds(snapshot, RenderTarget.page_canvas(), _resolution(72.0), 72, 36)

    assert bounds == pytest.approx((72.0, 72.0, 144.0, 108.0))


@pytest.mark.parametrize("preview_density", [36.0, 72.0, 96.0, 150.0])
@pytest.mark.parametrize("origin", [(0.0, 0.0), (18.0, 36.0)])
def test_preview_and_page_agree_in_page_space(
    preview_density: float, origin: tuple[float, float]
) -> None:
    snapshot = PlacementSnapshot(x_mm=37.0, y_mm=112.5, scale=1.7)
    resolution = _resolution(300.0)

    preview = RenderTarget(density=preview_density, origin_x=origin[0], origin_y=origin[1])
    canvas = RenderTarget.page_canvas()
    preview_t = compute_transform(snapshot, preview, resolution)
    canvas_t = compute_transform(snapshot, canvas, resolution)

    def _page_space(target: RenderTarget, x: float, y: float) -> tuple[float, float]:
        return (
            pixels_to_pu(x - target.origin_x, target.density),
            pixels_to_pu(y - target.origin_y, target.density),
        )

    for point in [(0.0, 0.0), (640.0, 0.0), (0.0, 480.0), (640.0, 480.0), (123.0, 45.0)]:
        from_preview = _page_space(preview, *preview_t.apply(*point))
        from_canvas = _page_space(canvas, *canvas_t.apply(*point))
        assert from_preview == pytest.approx(from_canvas, abs=1e-9)


def test_concat_applies_argument_first() -> None:
    t = AffineTransform.translation(10.0, 0.0)
    s = AffineTransform.scaling(2.0)

    assert t.concat(s).apply(1.0, 1.0) == (12.0, 2.0)
    assert s.concat(t).apply(1.0, 1.0) == (22.0, 2.0)


def test_zero_density_target_is_rejected() -> None:
    snapshot = PlacementSnapshot(x_mm=0.0, y_mm=0.0, scale=1.0)
    with pytest.raises(AssertionError):
        compute_transform(snapshot, RenderTarget(density=0.0), _resolution(72.0))
