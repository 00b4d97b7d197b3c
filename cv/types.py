"""
Internal data structures for the cone pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

HSV = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorBand:
    """Inclusive HSV range selecting one marker class."""
    name: str
    lower: HSV
    upper: HSV


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box around one contour, pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[int, int]:
        # Integer halving of the extent, as cv::Rect arithmetic does.
        return self.x + self.width // 2, self.y + self.height // 2

    def as_tuple(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class ContourResult:
    """Boxes for one mask: every examined box plus the accepted subset."""
    boxes: Tuple[BoundingBox, ...] = ()
    accepted: Tuple[BoundingBox, ...] = ()


@dataclass(frozen=True)
class MarkerDetections:
    """Contour results for both marker classes of one frame."""
    blue: ContourResult = field(default_factory=ContourResult)
    yellow: ContourResult = field(default_factory=ContourResult)


class RotationClass(Enum):
    CLOCKWISE = "Clockwise"
    COUNTER_CLOCKWISE = "Counter-Clockwise"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class SteeringObservation:
    """One steering value produced for a blue x yellow box pair."""
    steering: float
    timestamp_us: int
    blue_bearing: float
    yellow_bearing: float
    rotation: RotationClass
