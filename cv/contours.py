"""Contour extraction and box filtering for one marker mask."""
from __future__ import annotations

import cv2
import numpy as np

from cv.config import MIN_BOX_AREA_PX
from cv.types import BoundingBox, ContourResult


def find_boxes(mask: np.ndarray) -> list[BoundingBox]:
    """Bounding boxes of the outer contours of ``mask``, in contour order."""
    # Only outermost boundaries; holes inside a cone are ignored.
    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    boxes = []
    for contour in contours:
        x, y, w, h = cv2.boundingRect(contour)
        boxes.append(BoundingBox(x=int(x), y=int(y), width=int(w), height=int(h)))
    return boxes


def is_accepted(box: BoundingBox, min_area: int = MIN_BOX_AREA_PX) -> bool:
    return box.area > min_area


def extract_boxes(mask: np.ndarray, min_area: int = MIN_BOX_AREA_PX) -> ContourResult:
    """
    Reduce a mask to bounding boxes.

    Args:
        mask: Single-channel binary mask.
        min_area: Boxes with ``width * height`` at or below this are noise.

    Returns:
        ContourResult holding every examined box and the accepted subset.
    """
    boxes = find_boxes(mask)
    accepted = [box for box in boxes if is_accepted(box, min_area)]
    return ContourResult(boxes=tuple(boxes), accepted=tuple(accepted))
