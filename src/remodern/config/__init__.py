"""Configuration loading and validation."""

from remodern.config.loader import load_config
from remodern.config.schema import (
    EchoToolConfig,
    FileReadToolConfig,
    LoggingConfig,
    RemodernConfig,
    ServerConfig,
    ToolsConfig,
)

__all__ = [
    "EchoToolConfig",
    "FileReadToolConfig",
    "LoggingConfig",
    "RemodernConfig",
    "ServerConfig",
    "ToolsConfig",
    "load_config",
]
