"""
Scorecut Bars
=============

Bounded Context: Cutting scanned score systems into bar (measure) boxes.

Architecture:

    scorecut_bars/
    ├── geometry/          # Pure 2D primitives (immutable, stateless)
    │   ├── shapes.py      # Point2D, LineDiff, TranslatedLine
    │   ├── outcome.py     # Outcome, GeometryError
    │   └── primitives.py  # distances, heights, projection, translation
    │
    ├── partition/         # One system -> bar boxes (stateless)
    │   ├── barbox.py      # BarBox
    │   └── partitioner.py # partition_system, make_bar_boxes_from_active_bar_cut
    │
    ├── session/           # Interactive workflow
    │   ├── stages.py      # Stage union + events (immutable)
    │   ├── transitions.py # advance(state, event) (pure)
    │   ├── preview.py     # live bar boxes / calibration guides
    │   ├── document.py    # BarDocument (stateful accumulator)
    │   └── cutter.py      # BarCutSession (stateful driver)
    │
    ├── rendering/         # Visualization and cropping (stateless drawing)
    ├── logging/           # JSON structured logging
    └── config.py          # YAML configuration

Usage:

    # 1. Partition a calibrated system (stateless)
    from scorecut_bars import Point2D, make_bar_boxes_from_active_bar_cut

    bars = make_bar_boxes_from_active_bar_cut(
        Point2D(0, 0), Point2D(100, 0), Point2D(50, 10),
        [Point2D(30, 5), Point2D(70, 5)],
        first_bar_index_in_page=0,
        first_bar_index_in_document=0,
    )

    # 2. Or drive the interactive workflow (stateful)
    from scorecut_bars import BarCutSession, PageLoaded, BeginCut, Clicked

    session = BarCutSession()
    session.handle(PageLoaded(page_number=1))
    session.handle(BeginCut())
    for point in clicks:
        session.handle(Clicked(point))
    session.document.save_json("bars.json")
"""

# Geometry Layer (immutable, stateless)
from scorecut_bars.geometry import (
    Point2D,
    GeometryError,
    Outcome,
    DegenerateGeometryError,
)

# Partition Layer (stateless)
from scorecut_bars.partition import (
    BarBox,
    partition_system,
    make_bar_boxes_from_active_bar_cut,
)

# Session Layer (stateful)
from scorecut_bars.session import (
    BarCutSession,
    BarDocument,
    CuttingStage,
    PageLoaded,
    BeginCut,
    PointerMoved,
    Clicked,
    FinishCut,
    Committed,
    Reset,
    advance,
)

# Rendering Layer (stateless)
from scorecut_bars.rendering import BarBoxVisualizer, MeasureCropper, crop_bar

# Configuration
from scorecut_bars.config import CuttingConfig, RenderConfig, ScorecutConfig

__all__ = [
    # Geometry
    "Point2D",
    "GeometryError",
    "Outcome",
    "DegenerateGeometryError",
    # Partition
    "BarBox",
    "partition_system",
    "make_bar_boxes_from_active_bar_cut",
    # Session
    "BarCutSession",
    "BarDocument",
    "CuttingStage",
    "PageLoaded",
    "BeginCut",
    "PointerMoved",
    "Clicked",
    "FinishCut",
    "Committed",
    "Reset",
    "advance",
    # Rendering
    "BarBoxVisualizer",
    "MeasureCropper",
    "crop_bar",
    # Config
    "CuttingConfig",
    "RenderConfig",
    "ScorecutConfig",
]

__version__ = "1.0.0"
