"""SteeringLineWriter — one text line per emission, order preserved."""
from __future__ import annotations

import io

from cv.types import RotationClass, SteeringObservation
from streaming.output import SteeringLineWriter, format_steering_line


def _obs(steering: float, ts: int = 1600000000123456) -> SteeringObservation:
    return SteeringObservation(
        steering=steering,
        timestamp_us=ts,
        blue_bearing=1.0,
        yellow_bearing=0.4,
        rotation=RotationClass.CLOCKWISE,
    )


def test_line_format():
    assert format_steering_line(_obs(0.07716), "Group_05") == "Group_05;1600000000123456;0.07716"


def test_zero_and_constants():
    assert format_steering_line(_obs(0.0, 1), "T") == "T;1;0"
    assert format_steering_line(_obs(-0.02, 1), "T") == "T;1;-0.02"
    assert format_steering_line(_obs(-0.3, 1), "T") == "T;1;-0.3"


def test_six_significant_digits():
    assert format_steering_line(_obs(0.0641 * 0.123456789 + 0.0387, 1), "T") == "T;1;0.0466136"


def test_non_finite_values():
    assert format_steering_line(_obs(float("nan"), 1), "T") == "T;1;nan"
    assert format_steering_line(_obs(float("inf"), 1), "T") == "T;1;inf"


def test_writer_preserves_order():
    stream = io.StringIO()
    writer = SteeringLineWriter(stream=stream, tag="Group_05")
    for ts, value in [(1, 0.1), (1, -0.02), (2, -0.3)]:
        writer.emit(_obs(value, ts))
    assert stream.getvalue().splitlines() == [
        "Group_05;1;0.1",
        "Group_05;1;-0.02",
        "Group_05;2;-0.3",
    ]


def test_default_tag_from_settings(monkeypatch):
    monkeypatch.setattr("common.settings.OUTPUT_TAG", "TeamX")
    stream = io.StringIO()
    SteeringLineWriter(stream=stream).emit(_obs(0.5, 3))
    assert stream.getvalue() == "TeamX;3;0.5\n"
