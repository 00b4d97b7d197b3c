"""Shared test fixtures for the cone pipeline tests.

Frames are synthetic BGRA arrays with pure blue and pure yellow rectangles
on a black background, so HSV thresholds select exactly the drawn cones.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import pytest

from cv.pipeline import ConePipeline

BLUE_BGRA = (255, 0, 0, 255)
YELLOW_BGRA = (0, 255, 255, 255)

Rect = tuple[int, int, int, int]


def make_frame(
    width: int = 160,
    height: int = 120,
    blue: Sequence[Rect] = (),
    yellow: Sequence[Rect] = (),
) -> np.ndarray:
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[:, :, 3] = 255
    for color, rects in ((BLUE_BGRA, blue), (YELLOW_BGRA, yellow)):
        for x, y, w, h in rects:
            frame[y:y + h, x:x + w] = color
    return frame


@pytest.fixture()
def frame_factory():
    return make_frame


@pytest.fixture()
def pipeline() -> ConePipeline:
    return ConePipeline(emit_unfiltered_pairs=False)
