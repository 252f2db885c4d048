"""Unit tests for the geometry primitives."""

import logging
import math

import pytest

from scorecut_bars.geometry import (
    DegenerateGeometryError,
    GeometryError,
    Outcome,
    Point2D,
    degrees_to_radian,
    get_line_angle,
    measure_angle_from_points,
    measure_distance,
    measure_height_from_points,
    measure_line_diff,
    measure_triangle_area_from_points,
    project_point_on_line,
    proportion_point_on_line,
    radian_to_degrees,
    translate_line_through_point,
)
from scorecut_bars.geometry import primitives
from tests.conftest import assert_point


# ========== Distances ==========

def test_distance_to_self_is_zero() -> None:
    p = Point2D(12.5, -3)
    assert measure_distance(p, p) == 0


def test_distance_is_symmetric() -> None:
    p1, p2 = Point2D(1.5, 7.25), Point2D(-40, 3)
    assert measure_distance(p1, p2) == measure_distance(p2, p1)


def test_distance_pythagorean() -> None:
    assert measure_distance(Point2D(0, 0), Point2D(3, 4)) == pytest.approx(5)


def test_line_diff_unit_vector() -> None:
    diff = measure_line_diff(Point2D(0, 0), Point2D(3, 4)).unwrap()
    assert diff.dx == pytest.approx(0.6)
    assert diff.dy == pytest.approx(0.8)
    assert diff.length == pytest.approx(5)


def test_line_diff_coincident_points() -> None:
    outcome = measure_line_diff(Point2D(2, 2), Point2D(2, 2))
    assert not outcome.ok
    assert outcome.error is GeometryError.COINCIDENT_POINTS
    assert outcome.value is None


# ========== Triangles ==========

def test_triangle_area_right_triangle() -> None:
    area = measure_triangle_area_from_points(Point2D(0, 0), Point2D(4, 0), Point2D(0, 3))
    assert area.unwrap() == pytest.approx(6)


def test_triangle_area_collinear_is_zero() -> None:
    area = measure_triangle_area_from_points(Point2D(0, 0), Point2D(100, 0), Point2D(50, 0))
    assert area.unwrap() == 0


def test_triangle_area_negative_radicand_is_reported(monkeypatch) -> None:
    sides = iter([1.0, 1.0, 3.0])
    monkeypatch.setattr(primitives, "measure_distance", lambda p1, p2: next(sides))

    area = measure_triangle_area_from_points(Point2D(0, 0), Point2D(1, 0), Point2D(2, 0))

    assert area.error is GeometryError.DEGENERATE_TRIANGLE


def test_height_of_horizontal_edge() -> None:
    height = measure_height_from_points(Point2D(0, 0), Point2D(100, 0), Point2D(50, 10))
    assert height.unwrap() == pytest.approx(10)


def test_height_zero_base_fails() -> None:
    height = measure_height_from_points(Point2D(5, 5), Point2D(5, 5), Point2D(50, 10))
    assert height.error is GeometryError.COINCIDENT_POINTS
    with pytest.raises(DegenerateGeometryError) as excinfo:
        height.unwrap()
    assert excinfo.value.error is GeometryError.COINCIDENT_POINTS


# ========== Projection ==========

def test_project_point_below_line() -> None:
    projected = project_point_on_line(Point2D(0, 0), Point2D(100, 0), Point2D(50, 10))
    assert_point(projected.unwrap(), 50, 0)


def test_project_same_line_is_flip_invariant() -> None:
    p1, p2, p = Point2D(0, 0), Point2D(100, 0), Point2D(50, 10)
    plain = project_point_on_line(p1, p2, p, flip=False).unwrap()
    flipped = project_point_on_line(p1, p2, p, flip=True).unwrap()
    assert_point(flipped, plain.x, plain.y)


def test_project_point_above_line() -> None:
    for flip in (False, True):
        projected = project_point_on_line(Point2D(0, 0), Point2D(100, 0), Point2D(50, -10), flip)
        assert_point(projected.unwrap(), 50, 0)


def test_project_on_diagonal_line() -> None:
    projected = project_point_on_line(Point2D(0, 0), Point2D(10, 10), Point2D(0, 10))
    assert_point(projected.unwrap(), 5, 5)


def test_project_point_already_on_line() -> None:
    projected = project_point_on_line(Point2D(0, 0), Point2D(100, 0), Point2D(25, 0))
    assert_point(projected.unwrap(), 25, 0)


def test_project_on_translated_bottom_edge() -> None:
    projected = project_point_on_line(Point2D(0, 10), Point2D(100, 10), Point2D(30, 5), flip=True)
    assert_point(projected.unwrap(), 30, 10)


def test_project_on_zero_length_line() -> None:
    outcome = project_point_on_line(Point2D(1, 1), Point2D(1, 1), Point2D(50, 10))
    assert outcome.error is GeometryError.COINCIDENT_POINTS
    assert outcome.value is None


# ========== Proportion ==========

def test_proportion_along_x() -> None:
    ratio = proportion_point_on_line(Point2D(0, 0), Point2D(100, 0), Point2D(25, 0))
    assert ratio.unwrap() == pytest.approx(0.25)


def test_proportion_vertical_line_uses_y() -> None:
    ratio = proportion_point_on_line(Point2D(0, 0), Point2D(0, 100), Point2D(0, 40))
    assert ratio.unwrap() == pytest.approx(0.4)


def test_proportion_past_the_end_is_unbounded() -> None:
    ratio = proportion_point_on_line(Point2D(0, 0), Point2D(100, 0), Point2D(150, 0))
    assert ratio.unwrap() == pytest.approx(1.5)


def test_proportion_ignores_flip(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="scorecut")
    p1, p2, off_line = Point2D(0, 0), Point2D(100, 0), Point2D(40, 7)

    plain = proportion_point_on_line(p1, p2, off_line)
    flipped = proportion_point_on_line(p1, p2, off_line, flip=True)

    assert plain.value == flipped.value == pytest.approx(0.4)
    assert any("geometry.off_line" in record.getMessage() for record in caplog.records)


def test_proportion_coincident_points() -> None:
    ratio = proportion_point_on_line(Point2D(3, 3), Point2D(3, 3), Point2D(3, 3))
    assert ratio.error is GeometryError.COINCIDENT_POINTS


def test_proportion_of_projection_matches_direct_ratio() -> None:
    p1, p2 = Point2D(10, 20), Point2D(210, 60)
    on_line = Point2D(10 + 200 * 0.3, 20 + 40 * 0.3)
    off_line = Point2D(on_line.x - 4, on_line.y + 20)  # perpendicular offset

    projected = project_point_on_line(p1, p2, off_line).unwrap()

    assert proportion_point_on_line(p1, p2, projected).unwrap() == pytest.approx(
        proportion_point_on_line(p1, p2, on_line).unwrap()
    )


# ========== Translation ==========

def test_translate_line_below() -> None:
    line = translate_line_through_point(Point2D(0, 0), Point2D(100, 0), Point2D(50, 10)).unwrap()
    assert_point(line.p1_prime, 0, 10)
    assert_point(line.p2_prime, 100, 10)
    assert line.height == pytest.approx(10)


def test_translate_line_above() -> None:
    line = translate_line_through_point(Point2D(0, 0), Point2D(100, 0), Point2D(50, -10)).unwrap()
    assert_point(line.p1_prime, 0, -10)
    assert_point(line.p2_prime, 100, -10)
    assert line.height == pytest.approx(10)


def test_translated_line_passes_through_point() -> None:
    p1, p2, p_prime = Point2D(20, 40), Point2D(620, 10), Point2D(300, 120)
    line = translate_line_through_point(p1, p2, p_prime).unwrap()

    # p_prime lies on the translated line
    ex, ey = line.p2_prime.x - line.p1_prime.x, line.p2_prime.y - line.p1_prime.y
    cross = ex * (p_prime.y - line.p1_prime.y) - ey * (p_prime.x - line.p1_prime.x)
    assert cross / math.hypot(ex, ey) == pytest.approx(0, abs=1e-6)
    assert measure_distance(line.p1_prime, line.p2_prime) == pytest.approx(measure_distance(p1, p2))


def test_translate_zero_length_line() -> None:
    outcome = translate_line_through_point(Point2D(0, 0), Point2D(0, 0), Point2D(50, 10))
    assert outcome.error is GeometryError.COINCIDENT_POINTS


# ========== Angles ==========

def test_line_angle() -> None:
    assert get_line_angle(Point2D(0, 0), Point2D(10, 0)) == pytest.approx(0)
    assert get_line_angle(Point2D(0, 0), Point2D(0, 10)) == pytest.approx(math.pi / 2)


def test_angle_from_points_right_angle() -> None:
    angle = measure_angle_from_points(Point2D(1, 0), Point2D(0, 1), Point2D(0, 0))
    assert angle.unwrap() == pytest.approx(math.pi / 2)


def test_angle_from_points_straight_line() -> None:
    angle = measure_angle_from_points(Point2D(-1, 0), Point2D(1, 0), Point2D(0, 0))
    assert angle.unwrap() == pytest.approx(math.pi)


def test_angle_vertex_on_arm_fails() -> None:
    angle = measure_angle_from_points(Point2D(0, 0), Point2D(1, 0), Point2D(0, 0))
    assert angle.error is GeometryError.COINCIDENT_POINTS


def test_degree_conversions() -> None:
    assert radian_to_degrees(math.pi) == pytest.approx(180)
    assert degrees_to_radian(90) == pytest.approx(math.pi / 2)
    assert radian_to_degrees(degrees_to_radian(37.5)) == pytest.approx(37.5)


# ========== Determinism and value types ==========

def test_repeated_calls_are_identical() -> None:
    p1, p2, p = Point2D(13.7, 91.1), Point2D(512.3, 77.9), Point2D(201.4, 160.2)
    assert project_point_on_line(p1, p2, p, True) == project_point_on_line(p1, p2, p, True)
    assert translate_line_through_point(p1, p2, p) == translate_line_through_point(p1, p2, p)
    assert measure_height_from_points(p1, p2, p) == measure_height_from_points(p1, p2, p)


def test_point_from_dict_and_sequence() -> None:
    assert Point2D.from_dict({'x': 1, 'y': '2.5'}) == Point2D(1, 2.5)
    assert Point2D.from_sequence([3, 4]) == Point2D(3.0, 4.0)


def test_point_from_dict_missing_key() -> None:
    with pytest.raises(ValueError, match="Missing"):
        Point2D.from_dict({'x': 1})


def test_point_from_sequence_wrong_length() -> None:
    with pytest.raises(ValueError):
        Point2D.from_sequence([1, 2, 3])


def test_outcome_requires_exactly_one_field() -> None:
    with pytest.raises(ValueError):
        Outcome()
    with pytest.raises(ValueError):
        Outcome(value=1.0, error=GeometryError.COINCIDENT_POINTS)


def test_outcome_value_or() -> None:
    assert Outcome.success(2.0).value_or(0.0) == 2.0
    assert Outcome.failure(GeometryError.DEGENERATE_TRIANGLE).value_or(0.0) == 0.0
