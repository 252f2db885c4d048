"""
Session Layer
=============

Bounded Context: Interactive cutting workflow.

Responsibilities:
- Stage union and input events (immutable)
- Pure transition function advance(state, event)
- Live previews (bar boxes, calibration guides)
- Document of cut systems with running bar offsets (stateful)

Design Philosophy:
- Immutable states, pure transitions
- Mutable state only in BarCutSession / BarDocument
"""

from scorecut_bars.session.stages import (
    CuttingStage,
    CutState,
    CutEvent,
    Empty,
    Loaded,
    SelectingTopLeft,
    SelectingTopRight,
    SelectingHeight,
    Cutting,
    Saving,
    PageLoaded,
    BeginCut,
    PointerMoved,
    Clicked,
    FinishCut,
    Committed,
    Reset,
)
from scorecut_bars.session.transitions import advance, top_edge_proportion
from scorecut_bars.session.preview import (
    CalibrationGuides,
    calibration_guides,
    preview_bar_boxes,
)
from scorecut_bars.session.document import BarDocument, SystemCut
from scorecut_bars.session.cutter import BarCutSession

__all__ = [
    # Stages
    "CuttingStage",
    "CutState",
    "Empty",
    "Loaded",
    "SelectingTopLeft",
    "SelectingTopRight",
    "SelectingHeight",
    "Cutting",
    "Saving",
    # Events
    "CutEvent",
    "PageLoaded",
    "BeginCut",
    "PointerMoved",
    "Clicked",
    "FinishCut",
    "Committed",
    "Reset",
    # Transitions / previews
    "advance",
    "top_edge_proportion",
    "CalibrationGuides",
    "calibration_guides",
    "preview_bar_boxes",
    # Document
    "BarDocument",
    "SystemCut",
    "BarCutSession",
]
