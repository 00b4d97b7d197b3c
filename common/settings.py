"""
Process-wide settings resolved from the environment.
"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=BASE_DIR / ".env")


def _truthy(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Prefix of every steering line written to stdout.
OUTPUT_TAG = os.getenv("OUTPUT_TAG", "Group_05").strip() or "Group_05"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# false -> only boxes above the area threshold form pairs
EMIT_UNFILTERED_PAIRS = _truthy(os.getenv("EMIT_UNFILTERED_PAIRS"), default=True)

VEHICLE_FEED_ENABLED = _truthy(os.getenv("VEHICLE_FEED_ENABLED"), default=True)
