"""Logical stamp placement, independent of any rendering surface."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pagestamp.errors import ConfigError


@dataclass(frozen=True, slots=True)
class PlacementSnapshot:
    """Immutable read of the placement, with any live drag folded in."""

    x_mm: float
    y_mm: float
    scale: float
    dragging: bool = False


class PlacementState:
    """Position (mm from the page's top-left corner), scale and drag offset.

    Single writer: the interaction state machine in interactive mode, nobody
    in batch mode. Readers take a :class:`PlacementSnapshot`.
    """

    def __init__(self, x_mm: float = 0.0, y_mm: float = 0.0, scale: float = 1.0) -> None:
        _check_scale(scale)
        self._x_mm = float(x_mm)
        self._y_mm = float(y_mm)
        self._scale = float(scale)
        self._drag_dx = 0.0
        self._drag_dy = 0.0
        self._dragging = False

    def __repr__(self) -> str:
        return (
            f"PlacementState(x_mm={self._x_mm!r}, y_mm={self._y_mm!r}, scale={self._scale!r}, "
            f"drag=({self._drag_dx!r}, {self._drag_dy!r}))"
        )

    @property
    def position(self) -> tuple[float, float]:
        """Committed position, excluding any live drag."""
        return (self._x_mm, self._y_mm)

    @property
    def drag_offset(self) -> tuple[float, float]:
        return (self._drag_dx, self._drag_dy)

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def current_position(self) -> tuple[float, float]:
        """Committed position plus the live drag offset."""
        return (self._x_mm + self._drag_dx, self._y_mm + self._drag_dy)

    def snapshot(self) -> PlacementSnapshot:
        x_mm, y_mm = self.current_position()
        return PlacementSnapshot(x_mm=x_mm, y_mm=y_mm, scale=self._scale, dragging=self._dragging)

    def begin_drag(self) -> None:
        self._dragging = True
        self._drag_dx = 0.0
        self._drag_dy = 0.0

    def update_drag(self, dx_mm: float, dy_mm: float) -> None:
        if not self._dragging:
            raise RuntimeError("update_drag() called outside a drag gesture")
        self._drag_dx = float(dx_mm)
        self._drag_dy = float(dy_mm)

    def commit_drag(self) -> None:
        """Fold the drag offset into the position; a no-op when not dragging."""
        if not self._dragging:
            return
        self._x_mm += self._drag_dx
        self._y_mm += self._drag_dy
        self.cancel_drag()

    def cancel_drag(self) -> None:
        self._drag_dx = 0.0
        self._drag_dy = 0.0
        self._dragging = False

    def set_scale(self, scale: float) -> None:
        _check_scale(scale)
        self._scale = float(scale)

    def set_position(self, x_mm: float, y_mm: float) -> None:
        self._x_mm = float(x_mm)
        self._y_mm = float(y_mm)


def _check_scale(scale: float) -> None:
    if not math.isfinite(scale) or scale <= 0:
        raise ConfigError(f"Stamp scale must be > 0, got {scale!r}")
