"""
Geometry Layer
==============

Bounded Context: Pure 2D primitives for system calibration.

Responsibilities:
- Point / line value types (immutable)
- Distances, triangle heights, angles
- Point-to-line projection and parallel line translation
- NO state, NO partitioning, NO drawing

Design Philosophy:
- Pure functions
- Immutable data structures
- Degenerate input reported as typed Outcome failures
"""

from scorecut_bars.geometry.shapes import Point2D, LineDiff, TranslatedLine
from scorecut_bars.geometry.outcome import GeometryError, Outcome, DegenerateGeometryError
from scorecut_bars.geometry.primitives import (
    measure_distance,
    measure_line_diff,
    measure_triangle_area_from_points,
    measure_height_from_points,
    project_point_on_line,
    proportion_point_on_line,
    translate_line_through_point,
    radian_to_degrees,
    degrees_to_radian,
    get_line_angle,
    measure_angle_from_points,
)

__all__ = [
    # Values
    "Point2D",
    "LineDiff",
    "TranslatedLine",
    # Outcomes
    "GeometryError",
    "Outcome",
    "DegenerateGeometryError",
    # Primitives
    "measure_distance",
    "measure_line_diff",
    "measure_triangle_area_from_points",
    "measure_height_from_points",
    "project_point_on_line",
    "proportion_point_on_line",
    "translate_line_through_point",
    "radian_to_degrees",
    "degrees_to_radian",
    "get_line_angle",
    "measure_angle_from_points",
]
