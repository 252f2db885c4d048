"""
Cutting Previews
================

Stateless views of an in-progress cut, recomputed on every pointer move.

- preview_bar_boxes(): bars as they would be saved right now
- calibration_guides(): points and edges known so far, for drawing
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from scorecut_bars.geometry.shapes import Point2D
from scorecut_bars.geometry.primitives import translate_line_through_point
from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.partition.partitioner import make_bar_boxes_from_active_bar_cut
from scorecut_bars.session.stages import (
    CutState,
    SelectingTopLeft,
    SelectingTopRight,
    SelectingHeight,
    Cutting,
    Saving,
)

Edge = Tuple[Point2D, Point2D]


@dataclass(frozen=True)
class CalibrationGuides:
    """
    Calibration geometry known at the current stage.

    Attributes:
        points: Calibration points chosen or previewed, in selection order
        top_edge: (top_left, top_right) once both are known
        bottom_edge: Top edge translated through the staff height point
        break_points: Break points collected so far (plus the preview)
    """

    points: Tuple[Point2D, ...] = ()
    top_edge: Optional[Edge] = None
    bottom_edge: Optional[Edge] = None
    break_points: Tuple[Point2D, ...] = ()


def preview_bar_boxes(
    state: CutState,
    first_bar_index_in_page: int = 0,
    first_bar_index_in_document: int = 0,
) -> List[BarBox]:
    """
    Bar boxes for the current state; the pointer preview counts as a break.

    Returns:
        Bar boxes while cutting or saving, otherwise an empty list
    """
    if isinstance(state, Cutting):
        break_points = state.break_points
        if state.preview is not None:
            break_points = break_points + (state.preview,)
    elif isinstance(state, Saving):
        break_points = state.break_points
    else:
        return []

    return make_bar_boxes_from_active_bar_cut(
        state.top_left,
        state.top_right,
        state.staff_height_point,
        break_points,
        first_bar_index_in_page,
        first_bar_index_in_document,
    )


def _bottom_edge(top_left: Point2D, top_right: Point2D, height_point: Point2D) -> Optional[Edge]:
    bottom = translate_line_through_point(top_left, top_right, height_point)
    if not bottom.ok:
        return None
    return (bottom.value.p1_prime, bottom.value.p2_prime)


def calibration_guides(state: CutState) -> CalibrationGuides:
    """Points and edges to draw for the current state."""
    if isinstance(state, SelectingTopLeft):
        points = (state.preview,) if state.preview is not None else ()
        return CalibrationGuides(points=points)

    if isinstance(state, SelectingTopRight):
        if state.preview is None:
            return CalibrationGuides(points=(state.top_left,))
        return CalibrationGuides(
            points=(state.top_left, state.preview),
            top_edge=(state.top_left, state.preview),
        )

    if isinstance(state, SelectingHeight):
        top_edge = (state.top_left, state.top_right)
        if state.preview is None:
            return CalibrationGuides(points=top_edge, top_edge=top_edge)
        return CalibrationGuides(
            points=top_edge + (state.preview,),
            top_edge=top_edge,
            bottom_edge=_bottom_edge(state.top_left, state.top_right, state.preview),
        )

    if isinstance(state, (Cutting, Saving)):
        break_points = state.break_points
        if isinstance(state, Cutting) and state.preview is not None:
            break_points = break_points + (state.preview,)
        return CalibrationGuides(
            points=(state.top_left, state.top_right, state.staff_height_point),
            top_edge=(state.top_left, state.top_right),
            bottom_edge=_bottom_edge(state.top_left, state.top_right, state.staff_height_point),
            break_points=break_points,
        )

    return CalibrationGuides()
