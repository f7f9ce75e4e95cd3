"""Paged-document engine port: page ranges, geometry and overlay merging."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pagestamp.utils.units import pu_to_mm


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Size and placement of one page, in page-space units (1/72 inch).

    ``width``/``height`` describe the visible page as displayed: its crop box
    after the page's ``rotation`` (clockwise degrees) is applied. Placement
    coordinates are measured in that frame. ``origin_x``/``origin_y`` locate
    the crop box's top-left corner inside the unrotated media box.
    """

    width: float
    height: float
    origin_x: float = 0.0
    origin_y: float = 0.0
    rotation: int = 0
    media_width: float | None = None
    media_height: float | None = None
    width_mm: float = field(init=False)
    height_mm: float = field(init=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Page must have a positive size, got {self.width}x{self.height}")
        if self.rotation not in (0, 90, 180, 270):
            raise ValueError(f"Page rotation must be a multiple of 90, got {self.rotation}")
        crop_width, crop_height = self.unrotated_size
        if self.media_width is None:
            object.__setattr__(self, "media_width", self.origin_x + crop_width)
        if self.media_height is None:
            object.__setattr__(self, "media_height", self.origin_y + crop_height)
        object.__setattr__(self, "width_mm", pu_to_mm(self.width))
        object.__setattr__(self, "height_mm", pu_to_mm(self.height))

    @property
    def unrotated_size(self) -> tuple[float, float]:
        """Crop box size before rotation."""
        if self.rotation in (90, 270):
            return (self.height, self.width)
        return (self.width, self.height)


class DocumentEnginePort(Protocol):
    """Port interface for paged-document manipulation.

    Every operation reads and writes whole files; documents are addressed by
    path and pages are 1-indexed. Implementations raise
    :class:`~pagestamp.errors.CollaboratorError` on malformed input or when
    the backing tool is unavailable.

    Side effects: Reads input PDFs, writes ``destination`` files (offline).
    """

    def page_count(self, path: Path) -> int:
        """Return the number of pages in ``path``."""
        ...

    def page_geometry(self, path: Path, page_number: int) -> PageGeometry:
        """Return the geometry of page ``page_number`` of ``path``."""
        ...

    def extract_range(self, path: Path, first: int, last: int, destination: Path) -> Path:
        """Write pages ``first..last`` (inclusive) of ``path`` to ``destination``."""
        ...

    def concatenate(self, paths: Sequence[Path], destination: Path) -> Path:
        """Write all pages of ``paths``, in order, to ``destination``."""
        ...

    def build_overlay(
        self,
        geometry: PageGeometry,
        image_data: bytes,
        rect: tuple[float, float, float, float],
        destination: Path,
    ) -> Path:
        """Write a single media-box sized page with the image drawn into ``rect``.

        ``rect`` is ``(x0, y0, x1, y1)`` in page-space units on the visible
        page described by ``geometry``. The image must appear upright there
        once the overlay is merged onto a page with that geometry.
        """
        ...

    def merge_overlay(self, base_path: Path, overlay_path: Path, destination: Path) -> Path:
        """Stamp the first page of ``overlay_path`` onto the first page of ``base_path``."""
        ...
