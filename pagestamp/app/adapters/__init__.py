"""Concrete adapters wiring application ports to PyMuPDF and Pillow."""

from __future__ import annotations

from .pillow_codec import PillowRasterCodec
from .pymupdf_engine import PyMuPDFDocumentEngine
from .pymupdf_preview import PyMuPDFPreviewRenderer

__all__ = [
    "PillowRasterCodec",
    "PyMuPDFDocumentEngine",
    "PyMuPDFPreviewRenderer",
]
