"""
Bar Partitioner Module
======================

Cuts one calibrated system into an ordered sequence of bar boxes.

Design:
- Stateless: every call recomputes from its arguments (safe for live preview)
- Typed failures via Outcome (partition_system)
- make_bar_boxes_from_active_bar_cut() keeps the list-or-empty contract

Algorithm:
    1. bottom edge = top edge translated through the staff height point
    2. left boundary starts at (top_left, bottom_left)
    3. each break point is projected on the top edge (flip=False) and on the
       bottom edge (flip=True); the projections close the current bar and
       open the next one
"""

from typing import List, Optional, Sequence

from scorecut_bars.geometry.shapes import Point2D
from scorecut_bars.geometry.outcome import GeometryError, Outcome
from scorecut_bars.geometry.primitives import (
    measure_distance,
    project_point_on_line,
    translate_line_through_point,
)
from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.logging import LogEvent, create_logger

_logger = create_logger("partition")


def partition_system(
    top_left: Optional[Point2D],
    top_right: Optional[Point2D],
    staff_height_point: Optional[Point2D],
    bar_break_points: Sequence[Point2D],
    first_bar_index_in_page: int = 0,
    first_bar_index_in_document: int = 0,
) -> Outcome[List[BarBox]]:
    """
    Partition a system into bar boxes.

    Break points are used in the given order (left to right is the caller's
    responsibility). A break point whose projection cannot be computed is
    skipped; indices follow the loop position, so a skipped bar leaves a gap
    in the index sequence.

    Args:
        top_left: Top-left corner of the system
        top_right: Top-right corner of the system
        staff_height_point: Point on the bottom edge of the system
        bar_break_points: Bar boundaries, ordered left to right
        first_bar_index_in_page: Page offset added to index_in_row
        first_bar_index_in_document: Document offset added to index_in_row

    Returns:
        Outcome with the bar boxes, or:
        - MISSING_CALIBRATION if a calibration point is None
        - COINCIDENT_POINTS if top_left == top_right
        - DEGENERATE_TRIANGLE if the staff height point lies on the top edge
    """
    if top_left is None or top_right is None or staff_height_point is None:
        missing = [
            name for name, point in (
                ('top_left', top_left),
                ('top_right', top_right),
                ('staff_height_point', staff_height_point),
            )
            if point is None
        ]
        return Outcome.failure(
            GeometryError.MISSING_CALIBRATION,
            f"missing calibration points: {', '.join(missing)}",
        )

    bottom = translate_line_through_point(top_left, top_right, staff_height_point)
    if not bottom.ok:
        return Outcome.failure(bottom.error, bottom.detail)

    height = bottom.value.height
    if height == 0:
        return Outcome.failure(
            GeometryError.DEGENERATE_TRIANGLE,
            "staff height point lies on the top edge",
        )

    bottom_left = bottom.value.p1_prime
    bottom_right = bottom.value.p2_prime

    bar_boxes: List[BarBox] = []
    bar_up_left = top_left
    bar_down_left = bottom_left

    for i, break_point in enumerate(bar_break_points):
        bar_up_right = project_point_on_line(top_left, top_right, break_point)
        bar_down_right = project_point_on_line(bottom_left, bottom_right, break_point, flip=True)

        if not bar_up_right.ok or not bar_down_right.ok:
            failed = bar_up_right if not bar_up_right.ok else bar_down_right
            _logger.warning(
                event=LogEvent.BAR_SKIPPED,
                message="Break point could not be projected on the system edges",
                metadata={
                    'index_in_row': i,
                    'break_point': break_point.to_dict(),
                    'reason': failed.error.value,
                },
            )
            continue

        bar_boxes.append(BarBox(
            upper_left_corner=bar_up_left,
            height=height,
            width=measure_distance(bar_up_left, bar_up_right.value),
            corners=(bar_up_left, bar_up_right.value, bar_down_right.value, bar_down_left),
            index_in_row=i,
            index_in_page=first_bar_index_in_page + i,
            index_in_document=first_bar_index_in_document + i,
        ))

        # right edge of this bar is the left edge of the next one
        bar_up_left = bar_up_right.value
        bar_down_left = bar_down_right.value

    return Outcome.success(bar_boxes)


def make_bar_boxes_from_active_bar_cut(
    top_left: Optional[Point2D],
    top_right: Optional[Point2D],
    staff_height_point: Optional[Point2D],
    bar_break_points: Sequence[Point2D],
    first_bar_index_in_page: int,
    first_bar_index_in_document: int,
) -> List[BarBox]:
    """
    Bar boxes for the active cut, or an empty list when none can be derived.

    Incomplete calibration is "nothing to report", not an error. Degenerate
    geometry also yields an empty list; use partition_system() to learn why.
    """
    outcome = partition_system(
        top_left,
        top_right,
        staff_height_point,
        bar_break_points,
        first_bar_index_in_page,
        first_bar_index_in_document,
    )
    if outcome.ok:
        _logger.debug(
            event=LogEvent.SYSTEM_PARTITIONED,
            message=f"Partitioned system into {len(outcome.value)} bars",
            metadata={'break_points': len(bar_break_points), 'bars': len(outcome.value)},
        )
        return outcome.value

    if outcome.error is GeometryError.MISSING_CALIBRATION:
        _logger.info(
            event=LogEvent.CALIBRATION_MISSING,
            message="Calibration incomplete, no bars to report",
            metadata={'detail': outcome.detail},
        )
    else:
        _logger.warning(
            event=LogEvent.PARTITION_FAILED,
            message="System geometry is degenerate, no bars produced",
            metadata={'reason': outcome.error.value, 'detail': outcome.detail},
        )
    return []
