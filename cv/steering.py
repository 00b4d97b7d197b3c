"""Rotation classification and the ground-steering heuristic."""
from __future__ import annotations

from cv.config import (
    HARD_TURN_STEERING,
    HARD_TURN_YAW,
    NARROW_YAW_MAX,
    NARROW_YAW_MIN,
    NARROW_YAW_STEERING,
    STEERING_INTERCEPT,
    STEERING_SLOPE,
)
from cv.types import RotationClass


def classify_rotation(blue_bearing: float, yellow_bearing: float) -> RotationClass:
    """Yellow below blue means the track is driven clockwise."""
    if yellow_bearing < blue_bearing:
        return RotationClass.CLOCKWISE
    if yellow_bearing > blue_bearing:
        return RotationClass.COUNTER_CLOCKWISE
    return RotationClass.UNKNOWN


def bearing_difference(
    blue_bearing: float,
    yellow_bearing: float,
    rotation: RotationClass,
    yaw_velocity: float,
) -> float:
    """Signed bearing gap; the sign flips with rotation class and yaw sign."""
    if rotation is RotationClass.CLOCKWISE:
        if yaw_velocity <= 0:
            return blue_bearing - yellow_bearing
        return yellow_bearing - blue_bearing
    if rotation is RotationClass.COUNTER_CLOCKWISE:
        if yaw_velocity <= 0:
            return yellow_bearing - blue_bearing
        return blue_bearing - yellow_bearing
    return 0.0


def steering_angle(
    blue_bearing: float,
    yellow_bearing: float,
    pedal_position: float,
    rotation: RotationClass,
    yaw_velocity: float,
) -> float:
    """
    Piecewise ground-steering estimate.

    The checks run in a fixed order: a stopped pedal wins, then the narrow
    yaw band, then the hard negative turn, and only then the linear fit on the
    bearing difference. Non-finite bearings propagate into the result.
    """
    difference = bearing_difference(blue_bearing, yellow_bearing, rotation, yaw_velocity)

    if pedal_position == 0:
        return 0.0
    if NARROW_YAW_MIN <= yaw_velocity < NARROW_YAW_MAX:
        return NARROW_YAW_STEERING
    if yaw_velocity < HARD_TURN_YAW:
        return HARD_TURN_STEERING
    return STEERING_SLOPE * difference + STEERING_INTERCEPT
