"""Custom exceptions for the steering session."""


class OrchestratorError(Exception):
    """Base orchestrator exception."""


class ConfigurationError(OrchestratorError):
    """Raised when required startup parameters are missing or invalid."""


class AdapterUnavailableError(OrchestratorError):
    """Raised when the frame source cannot be attached."""
