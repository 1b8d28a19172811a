"""Core approval engine for grantflow."""

from .errors import (
    WorkflowError,
    UnknownPermission,
    UnknownStage,
    ConfigurationError,
    InvalidDecision,
)

__all__ = [
    "WorkflowError",
    "UnknownPermission",
    "UnknownStage",
    "ConfigurationError",
    "InvalidDecision",
]
