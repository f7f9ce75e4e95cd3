"""Run-level orchestration: validate inputs, resolve, then splice or open a session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pagestamp.app.invocation import RunConfig
from pagestamp.app.placement import PlacementState
from pagestamp.app.ports.raster import RasterCodecPort
from pagestamp.app.preview_service import PreviewService
from pagestamp.app.resolution import (
    StampImage,
    StampResolution,
    load_stamp,
    resolve_stamp_density,
)
from pagestamp.app.session import PlacementSession
from pagestamp.app.splice_service import DocumentInfo, SpliceResult, SpliceService
from pagestamp.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PreparedRun:
    """Everything computed once at startup and immutable afterwards."""

    config: RunConfig
    document: DocumentInfo
    stamp: StampImage
    resolution: StampResolution


class StampService:
    """Orchestrates one stamping run.

    Configuration and resource problems surface from :meth:`prepare`, before
    any file is written.
    """

    def __init__(
        self,
        *,
        splice_service: SpliceService,
        codec: RasterCodecPort,
        settings: Settings | None = None,
    ):
        self.splice = splice_service
        self.codec = codec
        self._settings = settings or get_settings()

    def prepare(self, config: RunConfig) -> PreparedRun:
        """Inspect the document, load the stamp and resolve its density.

        Raises:
            ConfigError: Bad page index or density override
            ResourceError: Unreadable document or stamp
        """
        document = self.splice.describe(config.input_path, config.page)
        stamp = load_stamp(config.stamp_path, self.codec)
        resolution = resolve_stamp_density(
            stamp,
            self.codec,
            override=config.density_override,
            fallback=self._settings.fallback_density,
        )
        return PreparedRun(config=config, document=document, stamp=stamp, resolution=resolution)

    def output_path_for(self, config: RunConfig) -> tuple[Path, bool]:
        """Return the destination and whether it was derived automatically."""
        if config.output_path is not None:
            return Path(config.output_path), False
        return self._settings.default_output_path(Path(config.input_path)), True

    def run_batch(self, prepared: PreparedRun, output_path: Path) -> SpliceResult:
        """Stamp with the configured placement; the placement never changes."""
        config = prepared.config
        snapshot = PlacementState(x_mm=config.x, y_mm=config.y, scale=config.scale).snapshot()
        return self.splice.splice_page(
            document=prepared.document,
            stamp=prepared.stamp,
            snapshot=snapshot,
            resolution=prepared.resolution,
            output_path=output_path,
        )

    def open_session(
        self,
        prepared: PreparedRun,
        *,
        preview_density: float,
        preview_service: PreviewService,
    ) -> PlacementSession:
        logger.debug("Opening placement session at %s DPI", preview_density)
        return PlacementSession(
            config=prepared.config,
            document=prepared.document,
            stamp=prepared.stamp,
            resolution=prepared.resolution,
            preview_density=preview_density,
            splice_service=self.splice,
            preview_service=preview_service,
        )
