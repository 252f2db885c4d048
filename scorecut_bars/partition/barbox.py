"""
Bar Box Value Type
==================

Immutable quadrilateral region of one bar (measure) within a system.

Design Principles:
- Immutability: frozen=True, created in one batch per system
- Validation: constructor checks the corner count and dimensions
- Serialization: to_dict()/from_dict() for JSON persistence
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from scorecut_bars.geometry.shapes import Point2D

# Rounding noise ignored when snapping corners to whole pixels
_PIXEL_EPSILON = 1e-6


@dataclass(frozen=True)
class BarBox:
    """
    One bar of a system.

    Attributes:
        upper_left_corner: Top-left of this bar (previous bar's top-right)
        height: Perpendicular distance between the system's top and bottom edges
        width: Distance along the top edge between left and right boundary
        corners: (top-left, top-right, bottom-right, bottom-left)
        index_in_row: Position of the break point within its system
        index_in_page: index_in_row plus the page offset supplied by the caller
        index_in_document: index_in_row plus the document offset supplied by the caller

    Invariants:
        - exactly 4 corners
        - height >= 0, width >= 0
    """

    upper_left_corner: Point2D
    height: float
    width: float
    corners: Tuple[Point2D, Point2D, Point2D, Point2D]
    index_in_row: int
    index_in_page: int
    index_in_document: int

    def __post_init__(self):
        """Validate invariants."""
        corners = tuple(self.corners)
        if len(corners) != 4:
            raise ValueError(f"BarBox must have exactly 4 corners, got {len(corners)}")
        object.__setattr__(self, 'corners', corners)

        if self.height < 0:
            raise ValueError(f"BarBox height must be >= 0, got {self.height}")
        if self.width < 0:
            raise ValueError(f"BarBox width must be >= 0, got {self.width}")

    @property
    def top_left(self) -> Point2D:
        return self.corners[0]

    @property
    def top_right(self) -> Point2D:
        return self.corners[1]

    @property
    def bottom_right(self) -> Point2D:
        return self.corners[2]

    @property
    def bottom_left(self) -> Point2D:
        return self.corners[3]

    def vertices(self) -> np.ndarray:
        """Corners as a 4x2 float array (TL, TR, BR, BL)."""
        return np.array([corner.as_tuple() for corner in self.corners], dtype=float)

    def bounding_xyxy(self) -> Tuple[int, int, int, int]:
        """
        Axis-aligned integer bounds enclosing the four corners.

        Returns:
            (x_min, y_min, x_max, y_max), outer edges rounded outward
        """
        vertices = self.vertices()
        x_min, y_min = np.floor(vertices.min(axis=0) + _PIXEL_EPSILON).astype(int)
        x_max, y_max = np.ceil(vertices.max(axis=0) - _PIXEL_EPSILON).astype(int)
        return int(x_min), int(y_min), int(x_max), int(y_max)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'upper_left_corner': self.upper_left_corner.to_dict(),
            'height': self.height,
            'width': self.width,
            'corners': [corner.to_dict() for corner in self.corners],
            'index_in_row': self.index_in_row,
            'index_in_page': self.index_in_page,
            'index_in_document': self.index_in_document,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BarBox':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                upper_left_corner=Point2D.from_dict(data['upper_left_corner']),
                height=float(data['height']),
                width=float(data['width']),
                corners=tuple(Point2D.from_dict(c) for c in data['corners']),
                index_in_row=int(data['index_in_row']),
                index_in_page=int(data['index_in_page']),
                index_in_document=int(data['index_in_document']),
            )
        except KeyError as e:
            raise ValueError(f"Missing required BarBox field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid BarBox data: {e}")
