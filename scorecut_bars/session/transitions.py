"""
Cutting Transitions
===================

Pure transition function of the cutting workflow: (state, event) -> state'.

Design:
- No side effects, no logging (BarCutSession observes the transitions)
- Unhandled (state, event) pairs return the state unchanged (same object)
- End of system detected by projecting a click on the top edge
- Calibration clicks that would give a zero-length top edge or a zero
  system height are ignored (the stage does not advance)
"""

from dataclasses import replace
from typing import Optional

from scorecut_bars.config import CuttingConfig
from scorecut_bars.geometry.shapes import Point2D
from scorecut_bars.geometry.primitives import (
    measure_distance,
    measure_height_from_points,
    project_point_on_line,
    proportion_point_on_line,
)
from scorecut_bars.session.stages import (
    CutEvent,
    CutState,
    Empty,
    Loaded,
    SelectingTopLeft,
    SelectingTopRight,
    SelectingHeight,
    Cutting,
    Saving,
    PageLoaded,
    BeginCut,
    PointerMoved,
    Clicked,
    FinishCut,
    Committed,
    Reset,
)

_DEFAULT_CONFIG = CuttingConfig()


def top_edge_proportion(state: Cutting, point: Point2D) -> Optional[float]:
    """
    Position of a point's projection along the system's top edge.

    Returns:
        Proportion (0.0 at top-left, 1.0 at top-right), or None when the
        top edge is degenerate
    """
    projected = project_point_on_line(state.top_left, state.top_right, point)
    if not projected.ok:
        return None
    proportion = proportion_point_on_line(state.top_left, state.top_right, projected.value)
    if not proportion.ok:
        return None
    return proportion.value


def _cut(state: Cutting, point: Point2D, config: CuttingConfig) -> CutState:
    proportion = top_edge_proportion(state, point)
    if proportion is None:
        return state

    if proportion > config.completion_threshold:
        break_points = state.break_points
        if config.include_final_break_point:
            break_points = break_points + (point,)
        return Saving(
            page_number=state.page_number,
            top_left=state.top_left,
            top_right=state.top_right,
            staff_height_point=state.staff_height_point,
            break_points=break_points,
        )

    return replace(state, break_points=state.break_points + (point,), preview=None)


def _click(state: CutState, point: Point2D, config: CuttingConfig) -> CutState:
    if isinstance(state, SelectingTopLeft):
        return SelectingTopRight(page_number=state.page_number, top_left=point)

    if isinstance(state, SelectingTopRight):
        if measure_distance(state.top_left, point) == 0:
            return state
        return SelectingHeight(
            page_number=state.page_number,
            top_left=state.top_left,
            top_right=point,
        )

    if isinstance(state, SelectingHeight):
        height = measure_height_from_points(state.top_left, state.top_right, point)
        if not height.ok or height.value == 0:
            return state
        return Cutting(
            page_number=state.page_number,
            top_left=state.top_left,
            top_right=state.top_right,
            staff_height_point=point,
        )

    if isinstance(state, Cutting):
        return _cut(state, point, config)

    return state


def advance(
    state: CutState,
    event: CutEvent,
    config: Optional[CuttingConfig] = None,
) -> CutState:
    """
    Next state of the cutting workflow.

    Args:
        state: Current state
        event: Input event
        config: Completion threshold and final break point policy

    Returns:
        The new state; ``state`` itself when the event does not apply
    """
    config = config or _DEFAULT_CONFIG

    if isinstance(event, Reset):
        return Empty()

    if isinstance(event, PageLoaded):
        return Loaded(page_number=event.page_number)

    if isinstance(event, BeginCut):
        if isinstance(state, Loaded):
            return SelectingTopLeft(page_number=state.page_number)
        return state

    if isinstance(event, PointerMoved):
        if isinstance(state, (SelectingTopLeft, SelectingTopRight, SelectingHeight, Cutting)):
            return replace(state, preview=event.point)
        return state

    if isinstance(event, Clicked):
        return _click(state, event.point, config)

    if isinstance(event, FinishCut):
        if isinstance(state, Cutting):
            return Saving(
                page_number=state.page_number,
                top_left=state.top_left,
                top_right=state.top_right,
                staff_height_point=state.staff_height_point,
                break_points=state.break_points,
            )
        return state

    if isinstance(event, Committed):
        if isinstance(state, Saving):
            return Empty()
        return state

    return state
