"""Application layer for pagestamp.

This layer holds the placement engine and orchestrates the splice without
direct PDF or image library calls. All such work is delegated to adapters
via port interfaces.
"""

__all__ = [
    "AffineTransform",
    "DragPhase",
    "DragStateMachine",
    "Invocation",
    "PlacementSession",
    "PlacementSnapshot",
    "PlacementState",
    "PreparedRun",
    "PreviewService",
    "RenderTarget",
    "ResolutionSource",
    "RunConfig",
    "SpliceResult",
    "SpliceService",
    "StampService",
    "StampImage",
    "StampResolution",
    "compute_transform",
    "load_stamp",
    "resolve_page_number",
    "resolve_stamp_density",
    "serialize_invocation",
]

from pagestamp.app.compositor import AffineTransform, RenderTarget, compute_transform
from pagestamp.app.interaction import DragPhase, DragStateMachine
from pagestamp.app.invocation import Invocation, RunConfig, serialize_invocation
from pagestamp.app.placement import PlacementSnapshot, PlacementState
from pagestamp.app.preview_service import PreviewService
from pagestamp.app.resolution import (
    ResolutionSource,
    StampImage,
    StampResolution,
    load_stamp,
    resolve_stamp_density,
)
from pagestamp.app.session import PlacementSession
from pagestamp.app.splice_service import SpliceResult, SpliceService, resolve_page_number
from pagestamp.app.stamp_service import PreparedRun, StampService
