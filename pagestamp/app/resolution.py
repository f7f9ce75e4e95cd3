"""Stamp loading and pixel-density resolution."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pagestamp.app.ports.raster import RasterCodecPort
from pagestamp.errors import ConfigError, DegradedResolution, ResourceError

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_DENSITY = 72.0


class ResolutionSource(str, Enum):
    """Where a stamp's density came from."""

    EXPLICIT = "explicit"
    METADATA = "metadata"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class StampImage:
    """A decoded stamp: raw bytes plus native pixel dimensions."""

    path: Path
    data: bytes
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class StampResolution:
    """Resolved stamp density in pixels per inch."""

    density: float
    source: ResolutionSource
    diagnostic: DegradedResolution | None = None

    @property
    def is_degraded(self) -> bool:
        return self.source is ResolutionSource.FALLBACK


def load_stamp(path: Path, codec: RasterCodecPort) -> StampImage:
    """Read and decode the stamp image at ``path``.

    Raises:
        ResourceError: If the file cannot be read, decoded, or has no pixels
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise ResourceError(f"Cannot read stamp image {path}: {exc}") from exc

    decoded = codec.decode(data)
    logger.debug("Loaded stamp %s (%sx%s px, %s)", path, decoded.width, decoded.height, decoded.mode)
    return StampImage(path=Path(path), data=data, width=decoded.width, height=decoded.height)


def resolve_stamp_density(
    stamp: StampImage,
    codec: RasterCodecPort,
    *,
    override: float | None = None,
    fallback: float = DEFAULT_FALLBACK_DENSITY,
) -> StampResolution:
    """Determine the stamp's pixels-per-inch.

    An explicit ``override`` wins and skips metadata inspection. Otherwise the
    image's embedded resolution is used; when it is missing or malformed the
    ``fallback`` density is returned together with a
    :class:`~pagestamp.errors.DegradedResolution` diagnostic.

    Raises:
        ConfigError: If ``override`` is given but not a finite positive number
    """
    if override is not None:
        if not math.isfinite(override) or override <= 0:
            raise ConfigError(f"Stamp density override must be > 0, got {override!r}")
        return StampResolution(density=float(override), source=ResolutionSource.EXPLICIT)

    density = codec.probe_density(stamp.data)
    if density is not None:
        logger.info("Stamp has %.1f DPI", density)
        return StampResolution(density=density, source=ResolutionSource.METADATA)

    diagnostic = DegradedResolution(reason="no resolution metadata", density=float(fallback))
    # Callers surface the diagnostic to the user; the log only records it.
    logger.info(diagnostic.message)
    return StampResolution(
        density=float(fallback),
        source=ResolutionSource.FALLBACK,
        diagnostic=diagnostic,
    )
