"""Tests for the pointer-drag state machine."""

from __future__ import annotations

import pytest

from pagestamp.app.interaction import DragPhase, DragStateMachine
from pagestamp.app.placement import PlacementState


class _RedrawCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


def test_drag_gesture_moves_stamp_by_pointer_delta() -> None:
    state = PlacementState(x_mm=10.0, y_mm=10.0)
    redraws = _RedrawCounter()
    machine = DragStateMachine(state, preview_density=72.0, on_redraw=redraws)

    assert machine.pointer_down(100.0, 100.0)
    assert machine.phase is DragPhase.DRAGGING
    assert machine.anchor == (100.0, 100.0)

    assert machine.pointer_move(172.0, 136.0)
    assert state.current_position() == pytest.approx((35.4, 22.7))

    assert machine.pointer_up()
    assert machine.phase is DragPhase.IDLE
    assert machine.anchor is None
    assert state.position == pytest.approx((35.4, 22.7))
    assert state.drag_offset == (0.0, 0.0)
    assert redraws.count == 2


def test_press_while_dragging_keeps_original_anchor() -> None:
    state = PlacementState()
    machine = DragStateMachine(state, preview_density=72.0)

    machine.pointer_down(10.0, 10.0)
    assert machine.pointer_down(50.0, 50.0) is False
    machine.pointer_move(82.0, 10.0)

    assert machine.anchor == (10.0, 10.0)
    assert state.current_position() == pytest.approx((25.4, 0.0))


def test_move_and_release_ignored_when_idle() -> None:
    state = PlacementState(x_mm=1.0, y_mm=2.0)
    redraws = _RedrawCounter()
    machine = DragStateMachine(state, preview_density=96.0, on_redraw=redraws)

    assert machine.pointer_move(300.0, 300.0) is False
    assert machine.pointer_up() is False
    assert state.current_position() == (1.0, 2.0)
    assert redraws.count == 0


def test_events_rejected_while_suspended() -> None:
    state = PlacementState()
    machine = DragStateMachine(state, preview_density=72.0)
    machine.pointer_down(0.0, 0.0)
    machine.pointer_move(72.0, 0.0)

    with machine.suspended():
        assert machine.pointer_move(144.0, 0.0) is False
        assert machine.pointer_up() is False
        assert machine.pointer_down(5.0, 5.0) is False
        assert state.current_position() == pytest.approx((25.4, 0.0))

    assert machine.pointer_up()
    assert state.position == pytest.approx((25.4, 0.0))


def test_suspension_lifts_after_exception() -> None:
    machine = DragStateMachine(PlacementState(), preview_density=72.0)

    with pytest.raises(ValueError):
        with machine.suspended():
            raise ValueError("save failed")

    assert machine.pointer_down(0.0, 0.0)
