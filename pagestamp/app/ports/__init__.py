"""Port interfaces for the pagestamp application layer.

These protocol interfaces define contracts for the external collaborators.
Engine logic depends on these ports, never on concrete implementations.
"""

__all__ = [
    "DecodedImage",
    "DocumentEnginePort",
    "PageGeometry",
    "PreviewRendererPort",
    "RasterCodecPort",
]

from pagestamp.app.ports.document import DocumentEnginePort, PageGeometry
from pagestamp.app.ports.preview import PreviewRendererPort
from pagestamp.app.ports.raster import DecodedImage, RasterCodecPort
