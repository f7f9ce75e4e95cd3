"""Raster codec port: stamp image decoding and metadata probing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from PIL import Image


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """Native pixel dimensions and mode of a decoded raster."""

    width: int
    height: int
    mode: str


class RasterCodecPort(Protocol):
    """Port interface for raster image handling.

    Side effects: None (operates on in-memory bytes).
    """

    def decode(self, data: bytes) -> DecodedImage:
        """Decode ``data`` and return its pixel dimensions.

        Raises :class:`~pagestamp.errors.ResourceError` if the bytes are not a
        readable image.
        """
        ...

    def probe_density(self, data: bytes) -> float | None:
        """Return the horizontal resolution in pixels per inch, if recorded.

        Missing or malformed metadata yields ``None``; this never raises for
        metadata problems.
        """
        ...

    def to_raster(self, data: bytes) -> "Image.Image":
        """Return an RGBA raster suitable for on-screen compositing."""
        ...
