"""Preview renderer port: page-to-raster rendering for live placement."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image


class PreviewRendererPort(Protocol):
    """Port interface for rasterising a document page.

    The returned image's pixel (0, 0) is the top-left corner of the visible
    page; one inch of page spans ``density`` pixels.

    Side effects: Reads the input PDF (offline).
    """

    def render_page(self, path: Path, page_number: int, density: float) -> "Image.Image":
        """Render 1-indexed ``page_number`` of ``path`` as an RGB image."""
        ...
