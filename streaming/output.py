"""Line-oriented sink for steering observations."""
from __future__ import annotations

import sys
import threading
from typing import TextIO

from common import settings
from cv.types import SteeringObservation


def format_steering_line(observation: SteeringObservation, tag: str) -> str:
    # %g mirrors the default six-significant-digit stream formatting.
    return f"{tag};{observation.timestamp_us};{observation.steering:g}"


class SteeringLineWriter:
    """Writes ``<tag>;<timestamp_us>;<steering>`` per observation, in order."""

    def __init__(self, stream: TextIO | None = None, tag: str | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.tag = tag or settings.OUTPUT_TAG
        self._lock = threading.Lock()

    def emit(self, observation: SteeringObservation) -> None:
        line = format_steering_line(observation, self.tag)
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()
