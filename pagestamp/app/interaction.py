"""Pointer-drag state machine driving the placement during interactive use.

The GUI forwards raw pointer events in and receives redraw requests out; it
never touches :class:`~pagestamp.app.placement.PlacementState` directly.

States:
- IDLE: waiting for a pointer press
- DRAGGING: anchor recorded, moves update the live drag offset
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum

from pagestamp.app.placement import PlacementState
from pagestamp.utils.units import pixels_to_mm

logger = logging.getLogger(__name__)


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragStateMachine:
    """Translate preview-canvas pointer events into placement mutations.

    Event handlers return ``True`` when the event was accepted.
    """

    def __init__(
        self,
        state: PlacementState,
        preview_density: float,
        on_redraw: Callable[[], None] | None = None,
    ) -> None:
        assert preview_density > 0, f"preview density must be > 0, got {preview_density!r}"
        self._state = state
        self._density = float(preview_density)
        self._on_redraw = on_redraw
        self._phase = DragPhase.IDLE
        self._anchor: tuple[float, float] | None = None
        self._suspended = False

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def anchor(self) -> tuple[float, float] | None:
        return self._anchor

    def pointer_down(self, x: float, y: float) -> bool:
        if self._suspended or self._phase is DragPhase.DRAGGING:
            return False
        self._anchor = (float(x), float(y))
        self._state.begin_drag()
        self._phase = DragPhase.DRAGGING
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        if self._suspended or self._phase is not DragPhase.DRAGGING or self._anchor is None:
            return False
        ax, ay = self._anchor
        self._state.update_drag(
            pixels_to_mm(x - ax, self._density),
            pixels_to_mm(y - ay, self._density),
        )
        self._request_redraw()
        return True

    def pointer_up(self) -> bool:
        if self._suspended or self._phase is not DragPhase.DRAGGING:
            return False
        self._state.commit_drag()
        self._phase = DragPhase.IDLE
        self._anchor = None
        logger.debug("Drag committed, placement now %s", self._state.position)
        self._request_redraw()
        return True

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Reject pointer events for the duration of the block (e.g. a save)."""
        previous = self._suspended
        self._suspended = True
        try:
            yield
        finally:
            self._suspended = previous

    def _request_redraw(self) -> None:
        if self._on_redraw is not None:
            self._on_redraw()
