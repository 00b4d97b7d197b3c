"""Debug overlay and on-screen display of annotated frames."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

import cv2
import numpy as np

from cv.config import (
    BOX_COLOR,
    BOX_THICKNESS,
    HEADER_COLOR,
    HEADER_FONT_SCALE,
    HEADER_ORIGIN,
    HEADER_TAG,
    HEADER_THICKNESS,
)
from cv.types import MarkerDetections

logger = logging.getLogger(__name__)


def header_text(timestamp_us: int, now: datetime | None = None, tag: str = HEADER_TAG) -> str:
    """Overlay header; the day of month is not zero-padded, the other date fields are."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    utc_time = f"{now.year}-{now.month:02d}-{now.day}T{now:%H:%M:%S}Z"
    return f"Now: {utc_time}; ts: {timestamp_us}; {tag};"


def annotate_frame(
    frame: np.ndarray,
    detections: MarkerDetections,
    timestamp_us: int,
    now: datetime | None = None,
) -> np.ndarray:
    """Return a copy of ``frame`` with the header and accepted boxes drawn."""
    canvas = frame.copy()
    cv2.putText(
        canvas,
        header_text(timestamp_us, now),
        HEADER_ORIGIN,
        cv2.FONT_HERSHEY_SIMPLEX,
        HEADER_FONT_SCALE,
        HEADER_COLOR,
        HEADER_THICKNESS,
    )
    for box in detections.blue.accepted + detections.yellow.accepted:
        cv2.rectangle(
            canvas,
            (box.x, box.y),
            (box.x + box.width - 1, box.y + box.height - 1),
            BOX_COLOR,
            BOX_THICKNESS,
        )
    return canvas


class DisplayRenderer:
    """Shows annotated frames in a HighGUI window."""

    def __init__(self, window_name: str):
        self.window_name = window_name
        self._failed = False

    def render(self, frame: np.ndarray) -> bool:
        try:
            cv2.imshow(self.window_name, frame)
            cv2.waitKey(1)
        except cv2.error as exc:
            # Headless hosts fail every frame; warn once.
            if not self._failed:
                logger.warning("Display unavailable for '%s': %s", self.window_name, exc)
            self._failed = True
            return False
        return True

    def close(self) -> None:
        try:
            cv2.destroyWindow(self.window_name)
        except cv2.error:
            pass
