"""Live preview: page raster plus the stamp composited at preview density."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from pagestamp.app.compositor import RenderTarget, stamp_bounds
from pagestamp.app.placement import PlacementSnapshot
from pagestamp.app.ports.document import PageGeometry
from pagestamp.app.ports.preview import PreviewRendererPort
from pagestamp.app.ports.raster import RasterCodecPort
from pagestamp.app.resolution import StampImage, StampResolution
from pagestamp.utils.units import MM_PER_INCH

logger = logging.getLogger(__name__)


def fit_preview_density(geometry: PageGeometry, max_width_px: float, max_height_px: float) -> int:
    """Largest whole density at which the page fits in the given pixel box."""
    density_w = max_width_px / (geometry.width_mm / MM_PER_INCH)
    density_h = max_height_px / (geometry.height_mm / MM_PER_INCH)
    return max(1, int(min(density_w, density_h)))


class PreviewService:
    """Renders preview frames; holds no placement state of its own."""

    def __init__(self, *, renderer: PreviewRendererPort, codec: RasterCodecPort):
        self.renderer = renderer
        self.codec = codec
        self._page_cache: dict[tuple[Path, int, float], Image.Image] = {}
        self._stamp_cache: dict[Path, Image.Image] = {}

    def render_page(self, input_path: Path, page_number: int, density: float) -> Image.Image:
        """Rasterise the page once per ``(path, page, density)``."""
        key = (Path(input_path), page_number, float(density))
        cached = self._page_cache.get(key)
        if cached is None:
            logger.debug("Rendering page %s of %s at %s DPI", page_number, input_path, density)
            cached = self.renderer.render_page(Path(input_path), page_number, density)
            self._page_cache[key] = cached
        return cached

    def stamp_raster(self, stamp: StampImage) -> Image.Image:
        cached = self._stamp_cache.get(stamp.path)
        if cached is None:
            cached = self.codec.to_raster(stamp.data)
            self._stamp_cache[stamp.path] = cached
        return cached

    def compose(
        self,
        base: Image.Image,
        stamp: StampImage,
        snapshot: PlacementSnapshot,
        resolution: StampResolution,
        target: RenderTarget,
    ) -> Image.Image:
        """Return a copy of ``base`` with the stamp drawn where the PDF will have it."""
        x0, y0, x1, y1 = stamp_bounds(snapshot, target, resolution, stamp.width, stamp.height)
        size = (max(1, round(x1 - x0)), max(1, round(y1 - y0)))

        frame = base.convert("RGB")
        sprite = self.stamp_raster(stamp).resize(size, Image.Resampling.LANCZOS)
        # paste clips at the frame edges; the sprite is its own alpha mask
        frame.paste(sprite, (round(x0), round(y0)), sprite)
        return frame

