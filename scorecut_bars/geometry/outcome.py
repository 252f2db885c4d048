"""
Geometry Outcomes
=================

Typed success/failure values returned by every primitive that can degenerate.

Design:
- Failures are values, not NaN propagation
- Named failure reasons (GeometryError enum)
- unwrap() bridges to exceptions for callers that prefer them
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class GeometryError(str, Enum):
    """Reason a geometric computation could not produce a value."""

    COINCIDENT_POINTS = "coincident_points"
    MISSING_CALIBRATION = "missing_calibration"
    DEGENERATE_TRIANGLE = "degenerate_triangle"


class DegenerateGeometryError(ValueError):
    """Raised by Outcome.unwrap() on a failed computation."""

    def __init__(self, error: GeometryError, detail: str = ""):
        self.error = error
        self.detail = detail
        message = error.value if not detail else f"{error.value}: {detail}"
        super().__init__(message)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a computation that may fail on degenerate input.

    Exactly one of ``value`` and ``error`` is set.

    Example:
        >>> outcome = measure_height_from_points(p1, p2, p_middle)
        >>> if outcome.ok:
        ...     height = outcome.value
        ... else:
        ...     print(outcome.error)  # GeometryError.COINCIDENT_POINTS
    """

    value: Optional[T] = None
    error: Optional[GeometryError] = None
    detail: str = ""

    def __post_init__(self):
        if self.error is None and self.value is None:
            raise ValueError("Outcome needs either a value or an error")
        if self.error is not None and self.value is not None:
            raise ValueError("Outcome cannot carry both a value and an error")

    @classmethod
    def success(cls, value: T) -> 'Outcome[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: GeometryError, detail: str = "") -> 'Outcome[T]':
        return cls(error=error, detail=detail)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """
        Return the value or raise.

        Raises:
            DegenerateGeometryError: If the computation failed
        """
        if self.error is not None:
            raise DegenerateGeometryError(self.error, self.detail)
        return self.value

    def value_or(self, default: T) -> T:
        return self.value if self.error is None else default
