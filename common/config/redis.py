"""Redis configuration and helpers for the vehicle-state feed."""
from __future__ import annotations

import os

from redis import Redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_VEHICLE_STATE_CHANNEL_PREFIX = os.getenv("REDIS_VEHICLE_STATE_CHANNEL_PREFIX", "vehicle-state")


def vehicle_state_channel(cid: int) -> str:
    """Build pub/sub channel name carrying vehicle-state messages for one session."""
    return f"{REDIS_VEHICLE_STATE_CHANNEL_PREFIX}:{cid}"


def create_redis_client() -> Redis:
    """Create a sync Redis client for the vehicle-state listener."""
    return Redis.from_url(REDIS_URL, decode_responses=True)
