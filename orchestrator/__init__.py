"""Steering session orchestration package."""

from .exceptions import (
    AdapterUnavailableError,
    ConfigurationError,
    OrchestratorError,
)
from .orchestrator import FrameOrchestrator
from .types import OrchestratorState, SessionConfig

__all__ = [
    "AdapterUnavailableError",
    "ConfigurationError",
    "FrameOrchestrator",
    "OrchestratorError",
    "OrchestratorState",
    "SessionConfig",
]
