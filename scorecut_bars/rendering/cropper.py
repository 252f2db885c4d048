"""
Measure Cropper Module
======================

Extracts one image per bar box from a page image.

Design:
- crop_bar() is a pure function (axis-aligned crop, optional polygon mask)
- MeasureCropper writes crops through supervision's ImageSink
- File names follow index_in_document so crops sort in reading order
"""

import os
from typing import Iterable, List, Optional

import cv2
import numpy as np
import supervision as sv

from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.logging import LogEvent, StructuredLogger, create_logger


def crop_bar(
    image: np.ndarray,
    bar_box: BarBox,
    mask_outside: bool = False,
    fill_value: int = 255,
) -> np.ndarray:
    """
    Crop the region of one bar from a page image.

    Args:
        image: Page image (H, W) or (H, W, C)
        bar_box: Bar to crop
        mask_outside: Paint pixels outside the bar's quadrilateral with
            ``fill_value`` (useful for slanted systems)
        fill_value: Value for masked pixels (255 = white paper)

    Returns:
        Cropped image

    Raises:
        ValueError: If the bar does not overlap the image
    """
    height, width = image.shape[:2]
    x_min, y_min, x_max, y_max = bar_box.bounding_xyxy()
    x_min, x_max = max(x_min, 0), min(x_max, width)
    y_min, y_max = max(y_min, 0), min(y_max, height)

    if x_max <= x_min or y_max <= y_min:
        raise ValueError(
            f"Bar {bar_box.index_in_document} does not overlap the image "
            f"({width}x{height})"
        )

    crop = sv.crop_image(image=image, xyxy=np.array([x_min, y_min, x_max, y_max]))

    if mask_outside:
        mask = np.zeros(crop.shape[:2], dtype=np.uint8)
        polygon = np.round(bar_box.vertices() - np.array([x_min, y_min])).astype(np.int32)
        cv2.fillPoly(mask, [polygon.reshape((-1, 1, 2))], color=1)
        crop = crop.copy()
        crop[mask == 0] = fill_value

    return crop


class MeasureCropper:
    """
    Saves the crop of every bar box to a directory.

    Usage:
        cropper = MeasureCropper(target_dir_path="./runs/crops")
        paths = cropper.save(page_image, document.bars())
    """

    def __init__(
        self,
        target_dir_path: str,
        mask_outside: bool = False,
        image_name_pattern: str = "bar_{:05d}.png",
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize cropper.

        Args:
            target_dir_path: Output directory (created if missing)
            mask_outside: Mask pixels outside each bar's quadrilateral
            image_name_pattern: File name pattern, formatted with index_in_document
            logger: Structured logger (default: "render" component)
        """
        self.target_dir_path = target_dir_path
        self.mask_outside = mask_outside
        self.image_name_pattern = image_name_pattern
        self._logger = (logger or create_logger("render")).bind(target_dir=target_dir_path)

    def save(self, image: np.ndarray, bar_boxes: Iterable[BarBox]) -> List[str]:
        """
        Crop and save every bar.

        Bars that do not overlap the image are skipped with a warning.

        Returns:
            Paths of the written images, in input order
        """
        paths = []
        with sv.ImageSink(target_dir_path=self.target_dir_path, overwrite=False) as sink:
            for bar_box in bar_boxes:
                try:
                    crop = crop_bar(image, bar_box, mask_outside=self.mask_outside)
                except ValueError as e:
                    self._logger.warning(
                        event=LogEvent.CROP_SKIPPED,
                        message=f"Skipped bar crop: {e}",
                        metadata={'index_in_document': bar_box.index_in_document},
                    )
                    continue

                image_name = self.image_name_pattern.format(bar_box.index_in_document)
                sink.save_image(image=crop, image_name=image_name)
                paths.append(os.path.join(self.target_dir_path, image_name))

                self._logger.debug(
                    event=LogEvent.CROP_SAVED,
                    message="Saved bar crop",
                    metadata={
                        'index_in_document': bar_box.index_in_document,
                        'shape': list(crop.shape),
                    },
                )
        return paths
