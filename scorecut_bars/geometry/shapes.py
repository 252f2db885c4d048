"""
Geometric Value Types
=====================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable values (frozen dataclass pattern)
- Canvas pixel space: origin top-left, y increasing downward
- Serialization: to_dict()/from_dict() for JSON export
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple


@dataclass(frozen=True)
class Point2D:
    """
    Immutable 2D point in canvas pixel space.

    Attributes:
        x: Horizontal coordinate (pixels, grows to the right)
        y: Vertical coordinate (pixels, grows downward)

    Example:
        >>> Point2D(340, 128).to_dict()
        {'x': 340.0, 'y': 128.0}
    """

    x: float
    y: float

    def __post_init__(self):
        """Normalize coordinates to float."""
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point2D':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(x=float(data['x']), y=float(data['y']))
        except KeyError as e:
            raise ValueError(f"Missing required Point2D field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Point2D data: {e}")

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'Point2D':
        """Build from an ``[x, y]`` pair (YAML/JSON list form)."""
        if len(values) != 2:
            raise ValueError(f"Point must have exactly 2 coordinates, got {len(values)}")
        try:
            return cls(x=float(values[0]), y=float(values[1]))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid point coordinates {values!r}: {e}")


@dataclass(frozen=True)
class LineDiff:
    """
    Unit direction vector of a directed line plus its length.

    Attributes:
        dx: x component of the unit vector from p1 to p2
        dy: y component of the unit vector from p1 to p2
        length: Euclidean distance from p1 to p2
    """

    dx: float
    dy: float
    length: float


@dataclass(frozen=True)
class TranslatedLine:
    """
    Segment parallel to a reference line, moved through a given point.

    Attributes:
        p1_prime: Translated first endpoint
        p2_prime: Translated second endpoint
        height: Perpendicular distance between the two lines (>= 0)
    """

    p1_prime: Point2D
    p2_prime: Point2D
    height: float
