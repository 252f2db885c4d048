"""
Geometry Primitives
===================

Stateless 2D measurements used to calibrate a system and cut it into bars.

Design:
- Pure functions (no state, identical inputs give identical outputs)
- Degenerate input is reported as an Outcome failure, never NaN
- Canvas coordinates (y grows downward)

Conventions:
- project_point_on_line() offsets the point along a reference normal chosen
  by ``flip``; the offset is signed by the side the point lies on, so the
  result is the foot of the perpendicular for either value of ``flip``.
- translate_line_through_point() moves the line along the normal
  (-dy, dx) of its p1 -> p2 direction, signed so the new line passes through
  the given point. For (0,0)-(100,0) and (50,10) the result is (0,10)-(100,10).
"""

import logging
import math

from scorecut_bars.geometry.shapes import Point2D, LineDiff, TranslatedLine
from scorecut_bars.geometry.outcome import GeometryError, Outcome
from scorecut_bars.logging import LogEvent, create_logger

_logger = create_logger("geometry")

# Distance (pixels) under which a point counts as lying on a line
ON_LINE_TOLERANCE = 1e-6


def measure_distance(p1: Point2D, p2: Point2D) -> float:
    """Euclidean distance between two points (0 for equal points)."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def measure_line_diff(p1: Point2D, p2: Point2D) -> Outcome[LineDiff]:
    """
    Unit direction vector from p1 to p2 plus the segment length.

    Returns:
        Outcome with LineDiff, or COINCIDENT_POINTS when p1 == p2
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    length = math.hypot(dx, dy)
    if length == 0:
        return Outcome.failure(
            GeometryError.COINCIDENT_POINTS,
            f"line endpoints coincide at {p1.as_tuple()}",
        )
    return Outcome.success(LineDiff(dx=dx / length, dy=dy / length, length=length))


def measure_triangle_area_from_points(
    p1: Point2D,
    p2: Point2D,
    p3: Point2D,
) -> Outcome[float]:
    """
    Triangle area by Heron's formula on the three pairwise distances.

    Collinear points give an area of 0. A negative radicand (the side lengths
    violate the triangle inequality after rounding) is a DEGENERATE_TRIANGLE
    failure, not a silent zero.
    """
    a = measure_distance(p1, p2)
    b = measure_distance(p2, p3)
    c = measure_distance(p3, p1)
    s = (a + b + c) / 2
    radicand = s * (s - a) * (s - b) * (s - c)
    if radicand < 0:
        return Outcome.failure(
            GeometryError.DEGENERATE_TRIANGLE,
            f"negative Heron radicand {radicand!r} for sides {a!r}, {b!r}, {c!r}",
        )
    return Outcome.success(math.sqrt(radicand))


def measure_height_from_points(
    p1: Point2D,
    p2: Point2D,
    p_middle: Point2D,
) -> Outcome[float]:
    """
    Perpendicular distance from p_middle to the line through p1 and p2.

    Computed as 2 * area / base.

    Returns:
        Outcome with the (non-negative) height; COINCIDENT_POINTS when the
        base has zero length; DEGENERATE_TRIANGLE propagated from the area.
    """
    base = measure_distance(p1, p2)
    if base == 0:
        return Outcome.failure(
            GeometryError.COINCIDENT_POINTS,
            f"zero-length base at {p1.as_tuple()}",
        )
    area = measure_triangle_area_from_points(p1, p2, p_middle)
    if not area.ok:
        return area
    return Outcome.success(2 * area.value / base)


def project_point_on_line(
    p1: Point2D,
    p2: Point2D,
    p_project: Point2D,
    flip: bool = False,
) -> Outcome[Point2D]:
    """
    Orthogonal projection of p_project onto the infinite line through p1, p2.

        p1 x---X-----x p2
               |
               x p_project

    The point is shifted by its height along the normal of the line. ``flip``
    selects the reference normal: False for the top edge of a system, True
    for the translated bottom edge.

    Args:
        p1: First point of the line
        p2: Second point of the line
        p_project: Point to project
        flip: Use the opposite normal as reference

    Returns:
        Outcome with the projected point, or COINCIDENT_POINTS when p1 == p2
    """
    distance = measure_distance(p1, p2)
    if distance == 0:
        _logger.debug(
            event=LogEvent.GEOMETRY_DEGENERATE,
            message="Cannot project on a zero-length line",
            metadata={'p1': p1.to_dict(), 'p2': p2.to_dict()},
        )
        return Outcome.failure(
            GeometryError.COINCIDENT_POINTS,
            f"line endpoints coincide at {p1.as_tuple()}",
        )

    dx = (p1.x - p2.x) / distance
    dy = (p1.y - p2.y) / distance

    sign = -1.0 if flip else 1.0
    normal_dx = dy * sign
    normal_dy = -dx * sign

    height = measure_height_from_points(p1, p2, p_project)
    if height.ok:
        offset = height.value
    elif height.error is GeometryError.DEGENERATE_TRIANGLE:
        # collinear up to rounding: the point already lies on the line
        _logger.debug(
            event=LogEvent.GEOMETRY_DEGENERATE,
            message="Projected point is collinear with the line",
            metadata={'point': p_project.to_dict(), 'detail': height.detail},
        )
        offset = 0.0
    else:
        return height

    side = (p_project.x - p1.x) * normal_dx + (p_project.y - p1.y) * normal_dy
    if side < 0:
        offset = -offset

    return Outcome.success(Point2D(
        x=p_project.x - normal_dx * offset,
        y=p_project.y - normal_dy * offset,
    ))


def proportion_point_on_line(
    p1: Point2D,
    p2: Point2D,
    p_project: Point2D,
    flip: bool = False,
) -> Outcome[float]:
    """
    Fractional position of a point already lying on the line (p1, p2).

    Close to 0.0 means near p1, close to 1.0 means near p2. The value is
    unbounded outside the segment, which is how a click past the end of a
    system is detected.

    The point is not re-projected: pass the result of
    project_point_on_line(). ``flip`` never changes the result: it only picks
    the normal for a DEBUG-level check that reports points off the line.

    Returns:
        Outcome with the ratio along x (along y for vertical lines), or
        COINCIDENT_POINTS when p1 == p2
    """
    if p1.x != p2.x:
        ratio = (p_project.x - p1.x) / (p2.x - p1.x)
    elif p1.y != p2.y:
        ratio = (p_project.y - p1.y) / (p2.y - p1.y)
    else:
        return Outcome.failure(
            GeometryError.COINCIDENT_POINTS,
            f"line endpoints coincide at {p1.as_tuple()}",
        )

    if _logger.logger.isEnabledFor(logging.DEBUG):
        on_line = project_point_on_line(p1, p2, p_project, flip)
        if on_line.ok and measure_distance(on_line.value, p_project) > ON_LINE_TOLERANCE:
            _logger.debug(
                event=LogEvent.GEOMETRY_OFF_LINE,
                message="Proportion requested for a point off the line",
                metadata={'point': p_project.to_dict(), 'projection': on_line.value.to_dict()},
            )

    return Outcome.success(ratio)


def translate_line_through_point(
    p1: Point2D,
    p2: Point2D,
    p_prime: Point2D,
) -> Outcome[TranslatedLine]:
    """
    Segment parallel to (p1, p2) lying on the line through p_prime.

        p1 x-------X-----x p2
                    \\
            (*)------x----(*)
        p1_prime  p_prime  p2_prime

    This is how the bottom edge of a system is derived from its top edge and
    the staff height point.

    Returns:
        Outcome with the translated endpoints and the translation distance,
        or the failure of the underlying line/height computation
    """
    line = measure_line_diff(p1, p2)
    if not line.ok:
        return line

    normal_dx = -line.value.dy
    normal_dy = line.value.dx

    height = measure_height_from_points(p1, p2, p_prime)
    if not height.ok:
        return height

    distance = height.value
    side = (p_prime.x - p1.x) * normal_dx + (p_prime.y - p1.y) * normal_dy
    if side < 0:
        distance = -distance

    return Outcome.success(TranslatedLine(
        p1_prime=Point2D(p1.x + normal_dx * distance, p1.y + normal_dy * distance),
        p2_prime=Point2D(p2.x + normal_dx * distance, p2.y + normal_dy * distance),
        height=height.value,
    ))


def radian_to_degrees(angle: float) -> float:
    return angle * (180 / math.pi)


def degrees_to_radian(angle: float) -> float:
    return angle * (math.pi / 180)


def get_line_angle(p1: Point2D, p2: Point2D) -> float:
    """Angle of the direction p1 -> p2 in radians (atan2, y downward)."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def measure_angle_from_points(
    p1: Point2D,
    p2: Point2D,
    p_middle: Point2D,
) -> Outcome[float]:
    """
    Angle p1 - p_middle - p2 at the vertex p_middle, in radians.

    Law of cosines; the cosine is clamped to [-1, 1] against rounding.

    Returns:
        Outcome with the angle in [0, pi], or COINCIDENT_POINTS when the
        vertex coincides with either arm endpoint
    """
    ab = measure_distance(p_middle, p1)
    bc = measure_distance(p_middle, p2)
    ac = measure_distance(p1, p2)
    if ab == 0 or bc == 0:
        return Outcome.failure(
            GeometryError.COINCIDENT_POINTS,
            f"angle vertex coincides with an arm at {p_middle.as_tuple()}",
        )
    cosine = (bc * bc + ab * ab - ac * ac) / (2 * bc * ab)
    return Outcome.success(math.acos(max(-1.0, min(1.0, cosine))))
