"""Core types, errors, and shared utilities."""

from remodern.core.errors import (
    ConfigError,
    ProtocolError,
    RemodernError,
    ToolAlreadyRegisteredError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)

__all__ = [
    "ConfigError",
    "ProtocolError",
    "RemodernError",
    "ToolAlreadyRegisteredError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolValidationError",
]
