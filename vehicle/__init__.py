"""Vehicle-state cache and the feeds that update it."""

from .feeds import (
    ANGULAR_VELOCITY_READING,
    PEDAL_POSITION_REQUEST,
    RedisVehicleStateListener,
    VehicleStateFeed,
)
from .state import VehicleState, VehicleStateCache

__all__ = [
    "ANGULAR_VELOCITY_READING",
    "PEDAL_POSITION_REQUEST",
    "RedisVehicleStateListener",
    "VehicleState",
    "VehicleStateCache",
    "VehicleStateFeed",
]
