"""ConePipeline — pair generation, area policy and degenerate geometry."""
from __future__ import annotations

import importlib
import math

import pytest

from common import settings
from cv.bearing import box_bearing
from cv.pipeline import ConePipeline
from cv.steering import classify_rotation, steering_angle
from cv.types import (
    BoundingBox,
    ContourResult,
    MarkerDetections,
    RotationClass,
)
from vehicle.state import VehicleState

DRIVING = VehicleState(pedal_position=50.0, yaw_velocity=20.0)


def _detections(blue=(), yellow=(), blue_accepted=None, yellow_accepted=None) -> MarkerDetections:
    return MarkerDetections(
        blue=ContourResult(boxes=tuple(blue), accepted=tuple(blue if blue_accepted is None else blue_accepted)),
        yellow=ContourResult(boxes=tuple(yellow), accepted=tuple(yellow if yellow_accepted is None else yellow_accepted)),
    )


class TestDetect:
    def test_detects_both_classes(self, pipeline, frame_factory):
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 20, 20)])
        detections = pipeline.detect(frame)
        assert detections.blue.accepted == (BoundingBox(40, 60, 20, 20),)
        assert detections.yellow.accepted == (BoundingBox(100, 20, 20, 20),)

    def test_empty_frame(self, pipeline, frame_factory):
        detections = pipeline.detect(frame_factory())
        assert detections.blue.boxes == ()
        assert detections.yellow.boxes == ()


class TestObservations:
    def test_single_pair_end_to_end(self, pipeline, frame_factory):
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 20, 20)])
        _, observations = pipeline.process(frame, DRIVING, timestamp_us=1234)

        blue = math.atan(70 / 50)
        yellow = math.atan(30 / 110)
        assert len(observations) == 1
        obs = observations[0]
        assert obs.timestamp_us == 1234
        assert obs.blue_bearing == pytest.approx(blue)
        assert obs.yellow_bearing == pytest.approx(yellow)
        assert obs.rotation is RotationClass.CLOCKWISE
        assert obs.steering == pytest.approx(0.0641 * (yellow - blue) + 0.0387)

    def test_cross_product_in_nested_order(self, pipeline):
        blue = [BoundingBox(10, 10, 20, 20), BoundingBox(60, 40, 20, 20)]
        yellow = [BoundingBox(100, 5, 10, 10), BoundingBox(120, 50, 10, 10), BoundingBox(5, 90, 10, 10)]
        observations = list(pipeline.observations(_detections(blue, yellow), DRIVING, 7))

        assert len(observations) == 6
        expected = [(box_bearing(b), box_bearing(y)) for b in blue for y in yellow]
        assert [(o.blue_bearing, o.yellow_bearing) for o in observations] == expected

    def test_each_pair_classified_separately(self, pipeline):
        blue = [BoundingBox(40, 40, 20, 20)]
        yellow = [BoundingBox(100, 5, 10, 10), BoundingBox(5, 90, 10, 10)]
        observations = list(pipeline.observations(_detections(blue, yellow), DRIVING, 0))
        assert [o.rotation for o in observations] == [
            RotationClass.CLOCKWISE,
            RotationClass.COUNTER_CLOCKWISE,
        ]

    def test_missing_class_yields_nothing(self, pipeline):
        blue = [BoundingBox(40, 40, 20, 20)]
        assert list(pipeline.observations(_detections(blue=blue), DRIVING, 0)) == []
        assert list(pipeline.observations(_detections(yellow=blue), DRIVING, 0)) == []

    def test_all_small_boxes_yield_nothing(self, pipeline, frame_factory):
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 8, 8)])
        detections, observations = pipeline.process(frame, DRIVING, 0)
        assert len(detections.yellow.boxes) == 1
        assert detections.yellow.accepted == ()
        assert observations == []

    def test_unfiltered_pairs_include_small_boxes(self, frame_factory):
        pipeline = ConePipeline(emit_unfiltered_pairs=True)
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 8, 8)])
        _, observations = pipeline.process(frame, DRIVING, 0)
        assert len(observations) == 1
        assert observations[0].yellow_bearing == pytest.approx(math.atan(24 / 104))

    def test_default_pairs_every_examined_box(self, monkeypatch, frame_factory):
        monkeypatch.delenv("EMIT_UNFILTERED_PAIRS", raising=False)
        importlib.reload(settings)
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 20, 20), (10, 100, 8, 8)])

        detections, observations = ConePipeline().process(frame, DRIVING, 0)

        assert len(detections.yellow.accepted) == 1
        assert len(observations) == 2
        assert {o.yellow_bearing for o in observations} == {
            box_bearing(box) for box in detections.yellow.boxes
        }

    def test_setting_selects_accepted_only(self, monkeypatch, frame_factory):
        monkeypatch.setattr(settings, "EMIT_UNFILTERED_PAIRS", False)
        frame = frame_factory(blue=[(40, 60, 20, 20)], yellow=[(100, 20, 20, 20), (10, 100, 8, 8)])
        _, observations = ConePipeline().process(frame, DRIVING, 0)
        assert len(observations) == 1

    def test_uses_supplied_vehicle_state(self, pipeline):
        detections = _detections([BoundingBox(40, 40, 20, 20)], [BoundingBox(100, 5, 10, 10)])
        stopped = list(pipeline.observations(detections, VehicleState(0.0, 20.0), 0))
        hard = list(pipeline.observations(detections, VehicleState(1.0, -70.0), 0))
        assert stopped[0].steering == 0.0
        assert hard[0].steering == -0.3

    def test_degenerate_center_does_not_raise(self, pipeline):
        detections = _detections([BoundingBox(0, 10, 1, 4)], [BoundingBox(0, 0, 1, 1)])
        observations = list(pipeline.observations(detections, DRIVING, 0))

        assert len(observations) == 1
        obs = observations[0]
        assert obs.blue_bearing == pytest.approx(math.pi / 2)
        assert math.isnan(obs.yellow_bearing)
        assert obs.rotation is RotationClass.UNKNOWN
        expected = steering_angle(obs.blue_bearing, obs.yellow_bearing, 50.0, obs.rotation, 20.0)
        assert obs.steering == pytest.approx(expected)
        assert classify_rotation(obs.blue_bearing, obs.yellow_bearing) is RotationClass.UNKNOWN
