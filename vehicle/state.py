"""Latest known pedal position and yaw velocity."""
from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleState:
    pedal_position: float = 0.0
    yaw_velocity: float = 0.0


class VehicleStateCache:
    """
    Last-write-wins holder shared by feed producers and the frame loop.

    Each field has its own lock. ``snapshot`` takes them one after the other,
    so the two values may come from different producer generations; no lock
    ever spans both fields.
    """

    def __init__(self):
        self._pedal_position = 0.0
        self._yaw_velocity = 0.0
        self._pedal_lock = threading.Lock()
        self._yaw_lock = threading.Lock()

    def update_pedal_position(self, value: float) -> None:
        with self._pedal_lock:
            self._pedal_position = value

    def update_yaw_velocity(self, value: float) -> None:
        with self._yaw_lock:
            self._yaw_velocity = value

    def pedal_position(self) -> float:
        with self._pedal_lock:
            return self._pedal_position

    def yaw_velocity(self) -> float:
        with self._yaw_lock:
            return self._yaw_velocity

    def snapshot(self) -> VehicleState:
        return VehicleState(
            pedal_position=self.pedal_position(),
            yaw_velocity=self.yaw_velocity(),
        )
