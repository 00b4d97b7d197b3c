"""
Per-frame cone pipeline: segmentation -> boxes -> bearings -> steering.
"""
from __future__ import annotations

from typing import Iterator

import numpy as np

from common import settings
from cv.bearing import box_bearing
from cv.config import BLUE_BAND, MIN_BOX_AREA_PX, YELLOW_BAND
from cv.contours import extract_boxes
from cv.segmentation import MarkerSegmenter
from cv.steering import classify_rotation, steering_angle
from cv.types import BoundingBox, ContourResult, MarkerDetections, SteeringObservation
from vehicle.state import VehicleState


class ConePipeline:
    """
    Turns one frame into a sequence of steering observations.

    One observation is produced per (blue box, yellow box) pair, blue boxes in
    the outer position. With ``emit_unfiltered_pairs`` (the default) every
    examined box takes part and the area threshold only decides which boxes
    are drawn; otherwise only boxes above the threshold pair up.
    """

    def __init__(
        self,
        segmenter: MarkerSegmenter | None = None,
        min_area: int = MIN_BOX_AREA_PX,
        emit_unfiltered_pairs: bool | None = None,
    ):
        self.segmenter = segmenter or MarkerSegmenter(bands=(BLUE_BAND, YELLOW_BAND))
        self.min_area = min_area
        if emit_unfiltered_pairs is None:
            emit_unfiltered_pairs = settings.EMIT_UNFILTERED_PAIRS
        self.emit_unfiltered_pairs = emit_unfiltered_pairs

    def detect(self, frame: np.ndarray) -> MarkerDetections:
        masks = self.segmenter.segment(frame)
        return MarkerDetections(
            blue=extract_boxes(masks[BLUE_BAND.name], self.min_area),
            yellow=extract_boxes(masks[YELLOW_BAND.name], self.min_area),
        )

    def _pair_candidates(self, result: ContourResult) -> tuple[BoundingBox, ...]:
        return result.boxes if self.emit_unfiltered_pairs else result.accepted

    def observations(
        self,
        detections: MarkerDetections,
        state: VehicleState,
        timestamp_us: int,
    ) -> Iterator[SteeringObservation]:
        """Yield one observation per blue x yellow pair; nothing if a class is empty."""
        blue_boxes = self._pair_candidates(detections.blue)
        yellow_boxes = self._pair_candidates(detections.yellow)

        for blue_box in blue_boxes:
            blue = box_bearing(blue_box)
            for yellow_box in yellow_boxes:
                yellow = box_bearing(yellow_box)
                rotation = classify_rotation(blue, yellow)
                yield SteeringObservation(
                    steering=steering_angle(
                        blue,
                        yellow,
                        state.pedal_position,
                        rotation,
                        state.yaw_velocity,
                    ),
                    timestamp_us=timestamp_us,
                    blue_bearing=blue,
                    yellow_bearing=yellow,
                    rotation=rotation,
                )

    def process(
        self,
        frame: np.ndarray,
        state: VehicleState,
        timestamp_us: int,
    ) -> tuple[MarkerDetections, list[SteeringObservation]]:
        detections = self.detect(frame)
        return detections, list(self.observations(detections, state, timestamp_us))
