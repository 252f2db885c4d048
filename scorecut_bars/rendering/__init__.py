"""
Rendering Layer
===============

Bounded Context: Visualization and extraction of bars.

Responsibilities:
- Draw calibration guides and bar boxes on page images
- Crop individual bars out of page images
- Pure rendering - no geometry decisions, no state

Design:
- Stateless drawing functions
- Uses supervision.draw.utils and supervision.ImageSink
- Configurable styles
"""

from scorecut_bars.rendering.visualizer import BarBoxVisualizer
from scorecut_bars.rendering.cropper import MeasureCropper, crop_bar

__all__ = [
    "BarBoxVisualizer",
    "MeasureCropper",
    "crop_bar",
]
