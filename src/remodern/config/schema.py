"""Pydantic models for remodern configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from remodern import __version__


class ServerConfig(BaseModel):
    """Metadata reported by the protocol server on ``initialize``."""

    name: str = "ReModern MCP Server"
    version: str = __version__
    protocol_version: str = "2024-11-05"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str = ""
    structured: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class EchoToolConfig(BaseModel):
    """Echo tool configuration."""

    enabled: bool = True
    prefix: str = ""


class FileReadToolConfig(BaseModel):
    """File read tool configuration."""

    enabled: bool = True
    allowed_dir: str | None = None
    max_bytes: int = Field(default=100 * 1024, gt=0)


class ToolsConfig(BaseModel):
    """Built-in tool configuration."""

    echo: EchoToolConfig = Field(default_factory=EchoToolConfig)
    file_read: FileReadToolConfig = Field(default_factory=FileReadToolConfig)


class RemodernConfig(BaseModel):
    """Top-level configuration for remodern."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
