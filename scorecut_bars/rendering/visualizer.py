"""
Bar Box Visualizer Module
=========================

Pure visualization layer for calibration guides and bar boxes.

Design:
- Stateless rendering (pure functions over BGR images)
- No geometry decisions beyond reading precomputed boxes/guides
- Configurable styles

Dependencies:
- supervision (draw utilities, Color, Point)
- opencv (calibration point markers)
- numpy (arrays)
"""

import cv2
import numpy as np
import supervision as sv
from typing import Iterable

from scorecut_bars.config import RenderConfig
from scorecut_bars.geometry.shapes import Point2D
from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.session.preview import CalibrationGuides


def _to_sv_point(point: Point2D) -> sv.Point:
    return sv.Point(x=int(round(point.x)), y=int(round(point.y)))


class BarBoxVisualizer:
    """
    Stateless visualizer for bar cutting.

    Usage:
        visualizer = BarBoxVisualizer(thickness=2)

        # Guides while calibrating
        page = visualizer.draw_calibration(page, session.guides())

        # Finished (or previewed) bars
        page = visualizer.draw_bar_boxes(page, session.preview())
    """

    def __init__(
        self,
        box_color: sv.Color = sv.Color(r=38, g=18, b=225),
        guide_color: sv.Color = sv.Color(r=42, g=107, b=169),
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=38, g=18, b=225),
        thickness: int = 2,
        point_radius: int = 4,
        text_scale: float = 0.5,
        text_thickness: int = 1,
        text_padding: int = 4,
        opacity: float = 0.15,
        show_labels: bool = True,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            box_color: Outline/fill color of bar boxes
            guide_color: Color of calibration edges and points
            text_color: Color of bar index labels
            text_background_color: Background of bar index labels
            thickness: Line thickness
            point_radius: Radius of calibration point markers
            text_scale: Scale factor for labels
            text_thickness: Thickness for labels
            text_padding: Padding for label background
            opacity: Opacity of bar box fill (0-1)
            show_labels: Draw index_in_document at each bar's center
        """
        self.box_color = box_color
        self.guide_color = guide_color
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.thickness = thickness
        self.point_radius = point_radius
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.opacity = opacity
        self.show_labels = show_labels

    @classmethod
    def from_config(cls, config: RenderConfig) -> "BarBoxVisualizer":
        return cls(
            thickness=config.thickness,
            point_radius=config.point_radius,
            text_scale=config.text_scale,
            show_labels=config.show_labels,
        )

    def draw_bar_boxes(
        self,
        image: np.ndarray,
        bar_boxes: Iterable[BarBox],
    ) -> np.ndarray:
        """
        Draw bar boxes on a page image.

        Args:
            image: BGR page image
            bar_boxes: Boxes to draw

        Returns:
            Image with bar boxes drawn
        """
        for bar_box in bar_boxes:
            vertices = bar_box.vertices()
            polygon = np.round(vertices).astype(np.int32)

            image = sv.draw_filled_polygon(
                scene=image,
                polygon=polygon,
                color=self.box_color,
                opacity=self.opacity,
            )
            image = sv.draw_polygon(
                scene=image,
                polygon=polygon,
                color=self.box_color,
                thickness=self.thickness,
            )

            if self.show_labels:
                center_x, center_y = vertices.mean(axis=0)
                image = sv.draw_text(
                    scene=image,
                    text=str(bar_box.index_in_document),
                    text_anchor=sv.Point(x=int(center_x), y=int(center_y)),
                    text_color=self.text_color,
                    text_scale=self.text_scale,
                    text_thickness=self.text_thickness,
                    text_padding=self.text_padding,
                    background_color=self.text_background_color,
                )

        return image

    def draw_calibration(
        self,
        image: np.ndarray,
        guides: CalibrationGuides,
    ) -> np.ndarray:
        """
        Draw calibration points, system edges and break points.

        Args:
            image: BGR page image
            guides: Guides of the current cutting state

        Returns:
            Image with guides drawn
        """
        edges = []
        if guides.top_edge is not None:
            edges.append(guides.top_edge)
        if guides.bottom_edge is not None:
            edges.append(guides.bottom_edge)
        if guides.top_edge is not None and guides.bottom_edge is not None:
            # sides of the system
            edges.append((guides.top_edge[0], guides.bottom_edge[0]))
            edges.append((guides.top_edge[1], guides.bottom_edge[1]))

        for start, end in edges:
            image = sv.draw_line(
                scene=image,
                start=_to_sv_point(start),
                end=_to_sv_point(end),
                color=self.guide_color,
                thickness=self.thickness,
            )

        for point in guides.points + guides.break_points:
            center = _to_sv_point(point)
            cv2.circle(
                image,
                (center.x, center.y),
                self.point_radius,
                self.guide_color.as_bgr(),
                self.thickness,
            )

        return image
