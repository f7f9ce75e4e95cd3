"""Page splice orchestration: stamp one page and re-stitch the document.

The splice is a short, ordered pipeline of collaborator calls. Every
intermediate artifact lives in a scoped temporary directory, and the final
document only appears at the destination once every step has succeeded.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field

from pagestamp.app.compositor import RenderTarget, stamp_bounds
from pagestamp.app.placement import PlacementSnapshot
from pagestamp.app.ports.document import DocumentEnginePort, PageGeometry
from pagestamp.app.resolution import StampImage, StampResolution
from pagestamp.config import Settings, get_settings
from pagestamp.errors import CollaboratorError, ConfigError, ResourceError
from pagestamp.utils.paths import ensure_dir, publish_atomically, validate_input_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_page_number(page: int, page_count: int) -> int:
    """Turn a user page index into a 1-based page number.

    Positive values are 1-based. Negative values resolve to
    ``page_count - abs(page)``, so ``-1`` selects the second-to-last page.

    Raises:
        ConfigError: If ``page`` is zero or resolves outside the document
    """
    if page == 0:
        raise ConfigError("Page index must not be 0 (pages are 1-based; negative counts from the end)")
    number = page if page > 0 else page_count - abs(page)
    if not 1 <= number <= page_count:
        raise ConfigError(
            f"Page index {page} resolves to page {number}, outside document with {page_count} pages"
        )
    return number


@dataclass(frozen=True, slots=True)
class DocumentInfo:
    """What the splice needs to know about the input document."""

    path: Path
    page_count: int
    page_number: int
    geometry: PageGeometry


class SpliceResult(BaseModel):
    """Result metadata produced after splicing a stamped page."""

    input_path: Path
    output_path: Path
    page_number: int = Field(..., ge=1, description="1-indexed page that was stamped")
    page_count: int = Field(..., ge=1)
    stamp_rect: tuple[float, float, float, float] = Field(
        ..., description="Stamp bounds (x0, y0, x1, y1) in page units on the visible page"
    )
    density: float = Field(..., gt=0, description="Stamp density used, pixels per inch")
    density_source: str
    steps: list[str] = Field(default_factory=list, description="Collaborator steps executed, in order")


class SpliceService:
    """Builds the stamped replacement page and reassembles the output PDF.

    All document I/O is delegated to the paged-document engine port.
    """

    def __init__(self, *, engine: DocumentEnginePort, settings: Settings | None = None):
        self.engine = engine
        self._settings = settings or get_settings()

    def describe(self, input_path: Path, page: int) -> DocumentInfo:
        """Inspect ``input_path`` and resolve ``page`` against it.

        Raises:
            ResourceError: If the document is missing, unreadable or empty
            ConfigError: If ``page`` does not name a page of the document
        """
        try:
            resolved = validate_input_file(input_path)
        except (FileNotFoundError, ValueError) as exc:
            raise ResourceError(str(exc)) from exc

        try:
            page_count = self.engine.page_count(resolved)
        except CollaboratorError as exc:
            raise ResourceError(f"Cannot read document {resolved}: {exc}") from exc
        if page_count < 1:
            raise ResourceError(f"Document {resolved} has no pages")

        page_number = resolve_page_number(page, page_count)
        try:
            geometry = self.engine.page_geometry(resolved, page_number)
        except CollaboratorError as exc:
            raise ResourceError(f"Cannot read page {page_number} of {resolved}: {exc}") from exc

        logger.info(
            "Page %s of %s is %.1f x %.1f mm", page_number, page_count, geometry.width_mm, geometry.height_mm
        )
        return DocumentInfo(
            path=resolved, page_count=page_count, page_number=page_number, geometry=geometry
        )

    def splice_page(
        self,
        *,
        document: DocumentInfo,
        stamp: StampImage,
        snapshot: PlacementSnapshot,
        resolution: StampResolution,
        output_path: Path,
    ) -> SpliceResult:
        """Stamp ``document.page_number`` and write the full document to ``output_path``.

        ``snapshot`` is read once; callers take it before the splice starts.

        Raises:
            CollaboratorError: If any step fails; ``step`` names which one.
                Nothing is written to ``output_path`` in that case.
        """
        source = document.path
        number = document.page_number
        total = document.page_count
        steps: list[str] = []

        rect = stamp_bounds(
            snapshot,
            RenderTarget.page_canvas(),
            resolution,
            stamp.width,
            stamp.height,
        )

        with tempfile.TemporaryDirectory(
            prefix="pagestamp-",
            dir=str(ensure_dir(self._settings.temp_dir)) if self._settings.temp_dir else None,
        ) as tmp:
            workdir = Path(tmp)

            page_pdf = self._step(
                steps,
                "extract-page",
                lambda: self.engine.extract_range(source, number, number, workdir / "page.pdf"),
            )
            overlay_pdf = self._step(
                steps,
                "build-overlay",
                lambda: self.engine.build_overlay(
                    document.geometry, stamp.data, rect, workdir / "overlay.pdf"
                ),
            )
            stamped_pdf = self._step(
                steps,
                "merge-overlay",
                lambda: self.engine.merge_overlay(page_pdf, overlay_pdf, workdir / "stamped.pdf"),
            )

            final_pdf = stamped_pdf
            if total > 1:
                parts: list[Path] = []
                if number > 1:
                    parts.append(
                        self._step(
                            steps,
                            "extract-pre",
                            lambda: self.engine.extract_range(
                                source, 1, number - 1, workdir / "pre.pdf"
                            ),
                        )
                    )
                parts.append(stamped_pdf)
                if number < total:
                    parts.append(
                        self._step(
                            steps,
                            "extract-post",
                            lambda: self.engine.extract_range(
                                source, number + 1, total, workdir / "post.pdf"
                            ),
                        )
                    )
                final_pdf = self._step(
                    steps,
                    "concatenate",
                    lambda: self.engine.concatenate(parts, workdir / "spliced.pdf"),
                )

            destination = self._step(
                steps, "publish", lambda: publish_atomically(final_pdf, Path(output_path))
            )

        logger.info("Stamped page %s of %s into %s", number, total, destination)
        return SpliceResult(
            input_path=source,
            output_path=destination,
            page_number=number,
            page_count=total,
            stamp_rect=rect,
            density=resolution.density,
            density_source=resolution.source.value,
            steps=steps,
        )

    def _step(self, steps: list[str], name: str, call: Callable[[], T]) -> T:
        """Run one collaborator call, tagging failures with the step name."""
        logger.debug("Splice step %s", name)
        try:
            result = call()
        except CollaboratorError as exc:
            exc.step = name
            raise
        except OSError as exc:
            raise CollaboratorError(str(exc), step=name, operation=name) from exc
        steps.append(name)
        return result
