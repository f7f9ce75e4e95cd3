"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from pagestamp.app import PreviewService, SpliceService, StampService
from pagestamp.app.adapters import (
    PillowRasterCodec,
    PyMuPDFDocumentEngine,
    PyMuPDFPreviewRenderer,
)
from pagestamp.app.ports import DocumentEnginePort, PreviewRendererPort, RasterCodecPort
from pagestamp.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    document_engine: DocumentEnginePort
    raster_codec: RasterCodecPort
    preview_renderer: PreviewRendererPort
    splice_service: SpliceService
    preview_service: PreviewService
    stamp_service: StampService


def bootstrap_application(
    settings: Settings | None = None,
    *,
    document_engine: DocumentEnginePort | None = None,
    raster_codec: RasterCodecPort | None = None,
    preview_renderer: PreviewRendererPort | None = None,
) -> ApplicationContainer:
    """Create the application container with default adapters.

    Adapters may be swapped (e.g. in tests) by passing them explicitly.
    """
    active_settings = settings or get_settings()
    engine = document_engine or PyMuPDFDocumentEngine()
    codec = raster_codec or PillowRasterCodec()
    renderer = preview_renderer or PyMuPDFPreviewRenderer()

    splice_service = SpliceService(engine=engine, settings=active_settings)
    preview_service = PreviewService(renderer=renderer, codec=codec)
    stamp_service = StampService(
        splice_service=splice_service,
        codec=codec,
        settings=active_settings,
    )

    return ApplicationContainer(
        settings=active_settings,
        document_engine=engine,
        raster_codec=codec,
        preview_renderer=renderer,
        splice_service=splice_service,
        preview_service=preview_service,
        stamp_service=stamp_service,
    )
