"""Vehicle-state producers: message dispatch and the Redis listener thread."""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict

from redis.exceptions import RedisError

from common.config import create_redis_client, vehicle_state_channel
from vehicle.state import VehicleStateCache

logger = logging.getLogger(__name__)

# OpenDLV standard message set identifiers
ANGULAR_VELOCITY_READING = 1056
PEDAL_POSITION_REQUEST = 1086

DATA_TYPE_KEY = "dataType"


class VehicleStateFeed:
    """Routes decoded producer messages to cache updates by message type."""

    def __init__(self, cache: VehicleStateCache):
        self.cache = cache
        self._handlers: Dict[int, Callable[[dict], None]] = {
            PEDAL_POSITION_REQUEST: self._on_pedal_position,
            ANGULAR_VELOCITY_READING: self._on_angular_velocity,
        }

    def _on_pedal_position(self, message: dict) -> None:
        self.cache.update_pedal_position(float(message["position"]))

    def _on_angular_velocity(self, message: dict) -> None:
        self.cache.update_yaw_velocity(float(message["angularVelocityZ"]))

    def dispatch(self, message: Dict[str, Any]) -> bool:
        """Apply one message; returns False when it was ignored or malformed."""
        try:
            data_type = int(message[DATA_TYPE_KEY])
        except (KeyError, TypeError, ValueError):
            logger.warning("Dropping vehicle-state message without %s: %r", DATA_TYPE_KEY, message)
            return False

        handler = self._handlers.get(data_type)
        if handler is None:
            return False

        try:
            handler(message)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Dropping malformed message type %s: %s", data_type, exc)
            return False
        return True

    def dispatch_raw(self, payload: str | bytes) -> bool:
        try:
            message = json.loads(payload)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError) as exc:
            logger.warning("Dropping undecodable vehicle-state payload: %s", exc)
            return False
        if not isinstance(message, dict):
            logger.warning("Dropping non-object vehicle-state payload: %r", message)
            return False
        return self.dispatch(message)


class RedisVehicleStateListener:
    """Subscribes to the session's vehicle-state channel and feeds the cache."""

    def __init__(
        self,
        feed: VehicleStateFeed,
        cid: int,
        poll_interval_seconds: float = 0.1,
        max_backoff_seconds: float = 8.0,
    ):
        self.feed = feed
        self.channel = vehicle_state_channel(cid)
        self._poll_interval_seconds = poll_interval_seconds
        self._max_backoff_seconds = max_backoff_seconds
        self._redis = create_redis_client()
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        logger.info("Listening for vehicle state on '%s'", self.channel)

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        try:
            self._redis.close()
        except Exception:
            pass

    def poll_once(self, pubsub) -> bool:
        message = pubsub.get_message(timeout=self._poll_interval_seconds)
        if not message or message.get("type") != "message":
            return False
        return self.feed.dispatch_raw(message["data"])

    def _run(self) -> None:
        backoff = 0.5
        while not self._stop_event.is_set():
            pubsub = self._redis.pubsub(ignore_subscribe_messages=True)
            try:
                pubsub.subscribe(self.channel)
                backoff = 0.5
                while not self._stop_event.is_set():
                    self.poll_once(pubsub)
            except RedisError as exc:
                logger.warning(
                    "Vehicle-state feed error on '%s': %s; retrying in %.1fs",
                    self.channel,
                    exc,
                    backoff,
                )
                self._stop_event.wait(backoff)
                backoff = min(backoff * 2.0, self._max_backoff_seconds)
            finally:
                try:
                    pubsub.close()
                except Exception:
                    pass
