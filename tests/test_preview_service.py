"""Tests for preview density fitting and frame composition."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PIL import Image

from pagestamp.app.adapters import PillowRasterCodec
from pagestamp.app.compositor import RenderTarget
from pagestamp.app.placement import PlacementSnapshot
from pagestamp.app.ports.document import PageGeometry
from pagestamp.app.preview_service import PreviewService, fit_preview_density
from pagestamp.app.resolution import ResolutionSource, StampResolution, load_stamp


class _CountingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[Path, int, float]] = []

    def render_page(self, path: Path, page_number: int, density: float) -> Image.Image:
        self.calls.append((path, page_number, density))
        return Image.new("RGB", (200, 200), "white")


def _resolution(density: float = 72.0) -> StampResolution:
    return StampResolution(density=density, source=ResolutionSource.EXPLICIT)


def test_fit_preview_density_a4() -> None:
    geometry = PageGeometry(width=595.0, height=842.0)

    assert fit_preview_density(geometry, 800, 1000) == 85


def test_fit_preview_density_never_below_one() -> None:
    geometry = PageGeometry(width=595.0, height=842.0)

    assert fit_preview_density(geometry, 1, 1) == 1


def test_render_page_is_cached_per_density(temp_dir: Path) -> None:
    renderer = _CountingRenderer()
    service = PreviewService(renderer=renderer, codec=PillowRasterCodec())
    source = temp_dir / "doc.pdf"

    first = service.render_page(source, 1, 72.0)
    second = service.render_page(source, 1, 72.0)
    service.render_page(source, 1, 96.0)

    assert first is second
    assert len(renderer.calls) == 2


def test_compose_draws_stamp_at_placement(make_stamp: Callable[..., Path]) -> None:
    codec = PillowRasterCodec()
    service = PreviewService(renderer=_CountingRenderer(), codec=codec)
    stamp = load_stamp(make_stamp(size=(20, 10)), codec)
    base = Image.new("RGB", (200, 200), "white")

    frame = service.compose(
        base,
        stamp,
        PlacementSnapshot(x_mm=25.4, y_mm=0.0, scale=2.0),
        _resolution(),
        RenderTarget.preview(72.0),
    )

    assert frame is not base
    assert base.getpixel((80, 5)) == (255, 255, 255)
    assert frame.getpixel((80, 5)) == (200, 0, 0)
    assert frame.getpixel((110, 15)) == (200, 0, 0)
    assert frame.getpixel((70, 5)) == (255, 255, 255)
    assert frame.getpixel((115, 5)) == (255, 255, 255)
    assert frame.getpixel((80, 25)) == (255, 255, 255)


def test_compose_clips_stamp_partly_off_canvas(make_stamp: Callable[..., Path]) -> None:
    codec = PillowRasterCodec()
    service = PreviewService(renderer=_CountingRenderer(), codec=codec)
    stamp = load_stamp(make_stamp(size=(20, 10)), codec)

    frame = service.compose(
        Image.new("RGB", (200, 200), "white"),
        stamp,
        PlacementSnapshot(x_mm=-2.54, y_mm=-2.54, scale=1.0),
        _resolution(),
        RenderTarget.preview(72.0),
    )

    assert frame.size == (200, 200)
    assert frame.getpixel((0, 0)) == (200, 0, 0)
    assert frame.getpixel((14, 0)) == (255, 255, 255)
