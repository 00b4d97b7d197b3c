"""
Colour segmentation of blue and yellow cones.
"""
from __future__ import annotations

from typing import Dict, Sequence

import cv2
import numpy as np

from cv.config import BLUE_BAND, OPENING_KERNEL_SIZE, YELLOW_BAND
from cv.types import ColorBand


def to_hsv(frame: np.ndarray) -> np.ndarray:
    """Convert a BGR or BGRA frame to HSV (alpha is ignored)."""
    if frame.ndim == 3 and frame.shape[2] == 4:
        frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)


class MarkerSegmenter:
    """
    Produces one binary mask per marker class.

    A pixel is set iff its HSV triple lies inside the class band on all three
    channels. Each mask is then opened with an elliptical kernel so isolated
    speckles disappear while cone-sized blobs survive.
    """

    def __init__(
        self,
        bands: Sequence[ColorBand] = (BLUE_BAND, YELLOW_BAND),
        kernel_size: tuple[int, int] = OPENING_KERNEL_SIZE,
    ):
        self.bands = tuple(bands)
        self.kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, kernel_size)

    def mask(self, hsv: np.ndarray, band: ColorBand) -> np.ndarray:
        lower = np.array(band.lower, dtype=np.uint8)
        upper = np.array(band.upper, dtype=np.uint8)
        raw = cv2.inRange(hsv, lower, upper)
        return cv2.morphologyEx(raw, cv2.MORPH_OPEN, self.kernel)

    def segment(self, frame: np.ndarray) -> Dict[str, np.ndarray]:
        """Return ``{band name: mask}`` for a BGR(A) frame."""
        hsv = to_hsv(frame)
        return {band.name: self.mask(hsv, band) for band in self.bands}
