"""Types for the steering session."""
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from orchestrator.exceptions import ConfigurationError


class SessionConfig(BaseModel):
    """Startup configuration; immutable for the lifetime of the process."""

    model_config = ConfigDict(frozen=True)

    cid: int = Field(..., ge=0, le=65535)
    name: str = Field(..., min_length=1)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    verbose: bool = False

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "SessionConfig":
        """Build from loosely typed values; ``None`` counts as missing."""
        provided = {key: value for key, value in values.items() if value is not None}
        try:
            return cls(**provided)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise ConfigurationError(f"Invalid or missing parameters: {', '.join(fields)}") from exc


class OrchestratorState(Enum):
    WAITING_FOR_FRAME = "waiting_for_frame"
    PROCESSING = "processing"
    STOPPED = "stopped"
