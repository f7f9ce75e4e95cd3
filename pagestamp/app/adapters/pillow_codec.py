"""Raster codec backed by Pillow."""

from __future__ import annotations

import logging
import math
from io import BytesIO
from typing import Any

from PIL import Image

from pagestamp.app.ports.raster import DecodedImage, RasterCodecPort
from pagestamp.errors import ResourceError

logger = logging.getLogger(__name__)


def _parse_density(value: Any) -> float | None:
    """Interpret a Pillow ``info["dpi"]`` entry; anything unusable is ``None``."""
    if value is None:
        return None
    if isinstance(value, (tuple, list)):
        if not value:
            return None
        value = value[0]
    try:
        density = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    if not math.isfinite(density) or density <= 0:
        return None
    return density


class PillowRasterCodec(RasterCodecPort):
    """Decode stamp images and read their resolution metadata with Pillow."""

    def decode(self, data: bytes) -> DecodedImage:
        try:
            with Image.open(BytesIO(data)) as image:
                image.load()
                width, height = image.size
                mode = image.mode
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ResourceError(f"Stamp image cannot be decoded: {exc}") from exc

        if width <= 0 or height <= 0:
            raise ResourceError(f"Stamp image has no pixels ({width}x{height})")
        return DecodedImage(width=width, height=height, mode=mode)

    def probe_density(self, data: bytes) -> float | None:
        try:
            with Image.open(BytesIO(data)) as image:
                raw = image.info.get("dpi")
        except (OSError, ValueError) as exc:
            logger.debug("Resolution probe failed: %s", exc)
            return None
        density = _parse_density(raw)
        if raw is not None and density is None:
            logger.debug("Ignoring malformed resolution metadata %r", raw)
        return density

    def to_raster(self, data: bytes) -> Image.Image:
        try:
            with Image.open(BytesIO(data)) as image:
                return image.convert("RGBA")
        except (OSError, ValueError) as exc:
            raise ResourceError(f"Stamp image cannot be decoded: {exc}") from exc
