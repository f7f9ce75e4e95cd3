"""Page rasteriser for the live placement preview, backed by PyMuPDF."""

from __future__ import annotations

from pathlib import Path

import fitz  # type: ignore[import]
from PIL import Image

from pagestamp.app.adapters.pymupdf_engine import open_document
from pagestamp.app.ports.preview import PreviewRendererPort
from pagestamp.utils.units import PU_PER_INCH


class PyMuPDFPreviewRenderer(PreviewRendererPort):
    """Render a page to an RGB Pillow image at a given density."""

    def render_page(self, path: Path, page_number: int, density: float) -> Image.Image:
        zoom = density / PU_PER_INCH
        with open_document(path, "render_page") as doc:
            page = doc[page_number - 1]
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
            return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
