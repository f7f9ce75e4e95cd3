"""Interactive placement session: the seam between the GUI and the engine.

The GUI forwards pointer and slider events in and subscribes to redraw
notifications; it never mutates placement state itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PIL import Image

from pagestamp.app.compositor import RenderTarget
from pagestamp.app.interaction import DragStateMachine
from pagestamp.app.invocation import RunConfig, serialize_invocation
from pagestamp.app.placement import PlacementState
from pagestamp.app.preview_service import PreviewService
from pagestamp.app.resolution import StampImage, StampResolution
from pagestamp.app.splice_service import DocumentInfo, SpliceResult, SpliceService

logger = logging.getLogger(__name__)

SCALE_PERCENT_MIN = 1
SCALE_PERCENT_MAX = 200


class SessionBusyError(RuntimeError):
    """Raised when a save is requested while another one is running."""


class PlacementSession:
    """Owns the placement state and drag machine for one interactive run."""

    def __init__(
        self,
        *,
        config: RunConfig,
        document: DocumentInfo,
        stamp: StampImage,
        resolution: StampResolution,
        preview_density: float,
        splice_service: SpliceService,
        preview_service: PreviewService,
    ) -> None:
        self.config = config
        self.document = document
        self.stamp = stamp
        self.resolution = resolution
        self.splice_service = splice_service
        self.preview_service = preview_service
        self.state = PlacementState(x_mm=config.x, y_mm=config.y, scale=config.scale)
        self.preview_target = RenderTarget.preview(preview_density)
        self.machine = DragStateMachine(self.state, preview_density, on_redraw=self._notify)
        self.last_output: Path | None = config.output_path
        self._listeners: list[Callable[[], None]] = []
        self._saving = False

    # ------------------------------------------------------------------
    # Event inputs
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> bool:
        return self.machine.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        return self.machine.pointer_move(x, y)

    def pointer_up(self) -> bool:
        return self.machine.pointer_up()

    def set_scale_percent(self, percent: int) -> None:
        """Slider input, clamped to 1..200 %."""
        clamped = max(SCALE_PERCENT_MIN, min(SCALE_PERCENT_MAX, int(percent)))
        self.state.set_scale(clamped / 100.0)
        self._notify()

    @property
    def scale_percent(self) -> int:
        return round(self.state.scale * 100)

    # ------------------------------------------------------------------
    # Redraw signalling
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def render_preview(self) -> Image.Image:
        base = self.preview_service.render_page(
            self.document.path, self.document.page_number, self.preview_target.density
        )
        return self.preview_service.compose(
            base, self.stamp, self.state.snapshot(), self.resolution, self.preview_target
        )

    # ------------------------------------------------------------------
    # Commit and export
    # ------------------------------------------------------------------

    @property
    def can_save(self) -> bool:
        return self.last_output is not None

    def save(self) -> SpliceResult:
        """Write to the remembered output path."""
        if self.last_output is None:
            raise RuntimeError("No output path chosen yet; use save_as()")
        return self.save_as(self.last_output)

    def save_as(self, output_path: Path) -> SpliceResult:
        """Splice with the current placement and remember ``output_path``."""
        if self._saving:
            raise SessionBusyError("A save is already in progress")
        self._saving = True
        try:
            with self.machine.suspended():
                snapshot = self.state.snapshot()
                result = self.splice_service.splice_page(
                    document=self.document,
                    stamp=self.stamp,
                    snapshot=snapshot,
                    resolution=self.resolution,
                    output_path=Path(output_path),
                )
        finally:
            self._saving = False
        self.last_output = result.output_path
        logger.info("Saved %s", result.output_path)
        return result

    def command_line(self) -> str:
        """The batch invocation reproducing the current placement."""
        invocation = serialize_invocation(
            self.config, snapshot=self.state.snapshot(), output_path=self.last_output
        )
        return invocation.to_command_line()
