"""Paged-document engine backed by PyMuPDF."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import fitz  # type: ignore[import]

from pagestamp.app.ports.document import DocumentEnginePort, PageGeometry
from pagestamp.errors import CollaboratorError

# Exceptions PyMuPDF raises for unreadable files, bad page numbers and
# malformed image streams.
_FITZ_ERRORS = (RuntimeError, ValueError, IndexError, OSError)


@contextmanager
def open_document(path: Path | None, operation: str) -> Iterator[fitz.Document]:
    """Open ``path`` (or a new empty document) and translate PyMuPDF failures."""
    try:
        doc = fitz.open(str(path)) if path is not None else fitz.open()
    except _FITZ_ERRORS as exc:
        raise CollaboratorError(f"cannot open {path}: {exc}", operation=operation) from exc
    try:
        yield doc
    except _FITZ_ERRORS as exc:
        raise CollaboratorError(f"{operation} failed: {exc}", operation=operation) from exc
    finally:
        doc.close()


def derotate_rect(
    rect: tuple[float, float, float, float], geometry: PageGeometry
) -> tuple[float, float, float, float]:
    """Map a rectangle on the displayed page into the unrotated crop box."""
    width, height = geometry.unrotated_size
    x0, y0, x1, y1 = rect
    if geometry.rotation == 90:
        corners = [(y0, height - x0), (y1, height - x1)]
    elif geometry.rotation == 180:
        corners = [(width - x0, height - y0), (width - x1, height - y1)]
    elif geometry.rotation == 270:
        corners = [(width - y0, x0), (width - y1, x1)]
    else:
        corners = [(x0, y0), (x1, y1)]
    (ax, ay), (bx, by) = corners
    return (min(ax, bx), min(ay, by), max(ax, bx), max(ay, by))


class PyMuPDFDocumentEngine(DocumentEnginePort):
    """Page-range extraction, concatenation and overlay merging via PyMuPDF."""

    _LOG = logging.getLogger(__name__)

    def page_count(self, path: Path) -> int:
        with open_document(path, "page_count") as doc:
            return doc.page_count

    def page_geometry(self, path: Path, page_number: int) -> PageGeometry:
        with open_document(path, "page_geometry") as doc:
            self._check_range(doc, page_number, page_number, "page_geometry")
            page = doc[page_number - 1]
            visible = page.rect
            origin = page.cropbox_position
            media = page.mediabox
            return PageGeometry(
                width=float(visible.width),
                height=float(visible.height),
                origin_x=float(origin.x),
                origin_y=float(origin.y),
                rotation=page.rotation % 360,
                media_width=float(media.width),
                media_height=float(media.height),
            )

    def extract_range(self, path: Path, first: int, last: int, destination: Path) -> Path:
        with (
            open_document(path, "extract_range") as source,
            open_document(None, "extract_range") as out,
        ):
            self._check_range(source, first, last, "extract_range")
            out.insert_pdf(source, from_page=first - 1, to_page=last - 1)
            out.save(str(destination))
        self._LOG.debug("Extracted pages %s-%s of %s to %s", first, last, path, destination)
        return destination

    def concatenate(self, paths: Sequence[Path], destination: Path) -> Path:
        if not paths:
            raise CollaboratorError("nothing to concatenate", operation="concatenate")
        with open_document(None, "concatenate") as out:
            for part in paths:
                with open_document(part, "concatenate") as source:
                    out.insert_pdf(source)
            out.save(str(destination))
        self._LOG.debug("Concatenated %s documents to %s", len(paths), destination)
        return destination

    def build_overlay(
        self,
        geometry: PageGeometry,
        image_data: bytes,
        rect: tuple[float, float, float, float],
        destination: Path,
    ) -> Path:
        x0, y0, x1, y1 = derotate_rect(rect, geometry)
        target = fitz.Rect(
            x0 + geometry.origin_x,
            y0 + geometry.origin_y,
            x1 + geometry.origin_x,
            y1 + geometry.origin_y,
        )
        with open_document(None, "build_overlay") as doc:
            page = doc.new_page(width=geometry.media_width, height=geometry.media_height)
            # Counter-rotate so the stamp reads upright once the page's
            # clockwise /Rotate is applied.
            page.insert_image(
                target, stream=image_data, keep_proportion=False, rotate=geometry.rotation
            )
            doc.save(str(destination))
        return destination

    def merge_overlay(self, base_path: Path, overlay_path: Path, destination: Path) -> Path:
        with (
            open_document(base_path, "merge_overlay") as base,
            open_document(overlay_path, "merge_overlay") as overlay,
        ):
            page = base[0]
            # The overlay is drawn in unrotated media coordinates; merge in
            # that frame and restore /Rotate afterwards.
            rotation = page.rotation
            if rotation:
                page.set_rotation(0)
            # The overlay spans the whole media box; show only the part under
            # the visible page.
            origin = page.cropbox_position
            crop = page.cropbox
            clip = fitz.Rect(origin.x, origin.y, origin.x + crop.width, origin.y + crop.height)
            page.show_pdf_page(page.rect, overlay, 0, clip=clip, overlay=True)
            if rotation:
                page.set_rotation(rotation)
            base.save(str(destination))
        return destination

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_range(self, doc: fitz.Document, first: int, last: int, operation: str) -> None:
        if not 1 <= first <= last <= doc.page_count:
            raise CollaboratorError(
                f"page range {first}-{last} outside document with {doc.page_count} pages",
                operation=operation,
            )
