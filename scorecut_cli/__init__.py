"""
Scorecut CLI - Command-line interface for bar cutting.

Replays recorded calibration clicks through the cutting workflow and writes
the resulting bar document, an annotated preview and per-bar crops.

Usage:
    scorecut cut cuts.yaml --image page-001.png --crop
    scorecut summary runs/cut/20251024_153045/bars.json
"""

__version__ = "1.0.0"
