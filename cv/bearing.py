"""Bearing of a detected cone from its box position."""
from __future__ import annotations

import numpy as np

from cv.types import BoundingBox


def box_bearing(box: BoundingBox) -> float:
    """
    ``atan(center_y / center_x)`` in radians, origin at the top-left pixel.

    A zero ``center_x`` follows IEEE division (``inf`` or ``nan``) instead of
    raising.
    """
    center_x, center_y = box.center
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = np.float64(center_y) / np.float64(center_x)
    return float(np.arctan(ratio))
