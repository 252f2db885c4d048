"""
Partition Layer
===============

Bounded Context: Cutting one calibrated system into bars.

Responsibilities:
- BarBox value type (immutable, serializable)
- Walking break points left to right to close/open bars
- NO interaction state, NO drawing
"""

from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.partition.partitioner import (
    partition_system,
    make_bar_boxes_from_active_bar_cut,
)

__all__ = [
    "BarBox",
    "partition_system",
    "make_bar_boxes_from_active_bar_cut",
]
