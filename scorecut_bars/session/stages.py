"""
Cutting Stages and Events
=========================

Immutable states of the interactive bar cutting workflow.

Design:
- Tagged union: one frozen dataclass per stage
- Each stage carries exactly the fields valid for it (a TopLeft-stage state
  cannot hold a staff height point)
- ``preview`` holds the pointer position while a point is being chosen

Stage sequence:

    Empty -> Loaded -> TopLeft -> TopRight -> Height -> Cutting -> Saving -> Empty
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from scorecut_bars.geometry.shapes import Point2D


class CuttingStage(str, Enum):
    """Stage names of the cutting workflow."""
    EMPTY = "empty"
    LOADED = "loaded"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    HEIGHT = "height"
    CUTTING = "cutting"
    SAVING = "saving"


@dataclass(frozen=True)
class Empty:
    """No page loaded."""
    stage: ClassVar[CuttingStage] = CuttingStage.EMPTY


@dataclass(frozen=True)
class Loaded:
    """Page rendered, no cut in progress."""
    stage: ClassVar[CuttingStage] = CuttingStage.LOADED

    page_number: int


@dataclass(frozen=True)
class SelectingTopLeft:
    """Waiting for the top-left corner of the system."""
    stage: ClassVar[CuttingStage] = CuttingStage.TOP_LEFT

    page_number: int
    preview: Optional[Point2D] = None


@dataclass(frozen=True)
class SelectingTopRight:
    """Waiting for the top-right corner of the system."""
    stage: ClassVar[CuttingStage] = CuttingStage.TOP_RIGHT

    page_number: int
    top_left: Point2D
    preview: Optional[Point2D] = None


@dataclass(frozen=True)
class SelectingHeight:
    """Waiting for a point on the bottom edge of the system."""
    stage: ClassVar[CuttingStage] = CuttingStage.HEIGHT

    page_number: int
    top_left: Point2D
    top_right: Point2D
    preview: Optional[Point2D] = None


@dataclass(frozen=True)
class Cutting:
    """Collecting bar break points, left to right."""
    stage: ClassVar[CuttingStage] = CuttingStage.CUTTING

    page_number: int
    top_left: Point2D
    top_right: Point2D
    staff_height_point: Point2D
    break_points: Tuple[Point2D, ...] = ()
    preview: Optional[Point2D] = None


@dataclass(frozen=True)
class Saving:
    """System fully cut, bar boxes ready to be stored."""
    stage: ClassVar[CuttingStage] = CuttingStage.SAVING

    page_number: int
    top_left: Point2D
    top_right: Point2D
    staff_height_point: Point2D
    break_points: Tuple[Point2D, ...] = ()


CutState = Union[
    Empty,
    Loaded,
    SelectingTopLeft,
    SelectingTopRight,
    SelectingHeight,
    Cutting,
    Saving,
]


# ========== Events ==========

@dataclass(frozen=True)
class PageLoaded:
    """A page finished rendering."""
    page_number: int = 1


@dataclass(frozen=True)
class BeginCut:
    """Start calibrating a new system on the loaded page."""


@dataclass(frozen=True)
class PointerMoved:
    """Pointer moved over the page (canvas coordinates)."""
    point: Point2D


@dataclass(frozen=True)
class Clicked:
    """Pointer clicked on the page (canvas coordinates)."""
    point: Point2D


@dataclass(frozen=True)
class FinishCut:
    """Close the system with the break points collected so far."""


@dataclass(frozen=True)
class Committed:
    """The bar boxes of the saving system were stored."""


@dataclass(frozen=True)
class Reset:
    """Abandon everything and return to Empty."""


CutEvent = Union[
    PageLoaded,
    BeginCut,
    PointerMoved,
    Clicked,
    FinishCut,
    Committed,
    Reset,
]
