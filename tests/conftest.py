"""Shared fixtures: a horizontal system 100px wide and 10px tall."""

import logging

import pytest

from scorecut_bars.config import CuttingConfig
from scorecut_bars.geometry import Point2D
from scorecut_bars.session import BarCutSession


@pytest.fixture
def top_left() -> Point2D:
    return Point2D(0, 0)


@pytest.fixture
def top_right() -> Point2D:
    return Point2D(100, 0)


@pytest.fixture
def staff_height_point() -> Point2D:
    return Point2D(50, 10)


@pytest.fixture
def break_points() -> list[Point2D]:
    return [Point2D(30, 5), Point2D(70, 5)]


@pytest.fixture
def session() -> BarCutSession:
    return BarCutSession(config=CuttingConfig())


def assert_point(point: Point2D, x: float, y: float) -> None:
    assert point.x == pytest.approx(x, abs=1e-9)
    assert point.y == pytest.approx(y, abs=1e-9)


@pytest.fixture(autouse=True)
def restore_log_level():
    namespace = logging.getLogger("scorecut")
    level = namespace.level
    yield
    namespace.setLevel(level)
