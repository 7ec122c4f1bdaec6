"""File read tool — reads source files safely.

Provides safe file reading with path traversal protection,
binary rejection, and size limits.  Unsafe paths are rejected during
validation, before the file is touched; a missing or unreadable file
is reported as a failed :class:`ToolResult`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from remodern.core.errors import ToolValidationError
from remodern.tools.base import BaseTool, ToolResult

MAX_FILE_SIZE = 100 * 1024  # 100KB


class FileReadParams(BaseModel):
    path: str = Field(description="Path to the file to read.")
    encoding: str = Field(default="utf-8", description="Text encoding of the file.")

    @field_validator("path")
    @classmethod
    def _path_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must be a non-empty string"
            raise ValueError(msg)
        return value


class FileReadTool(BaseTool[FileReadParams]):
    """File read tool with safety checks."""

    name = "file_read"
    description = "Read the contents of a text file."
    params_model = FileReadParams

    def __init__(
        self, *, allowed_dir: str | None = None, max_bytes: int = MAX_FILE_SIZE
    ) -> None:
        self._allowed_dir: Path | None = (
            Path(allowed_dir).resolve() if allowed_dir else None
        )
        self._max_bytes = max_bytes

    def validate_args(self, args: Mapping[str, Any] | None) -> FileReadParams:
        params = super().validate_args(args)
        self._validate_path(params.path)
        return params

    async def run(self, params: FileReadParams) -> ToolResult:
        resolved = Path(params.path).resolve()

        if not resolved.exists():
            return ToolResult.error(f"File not found: {params.path}")

        if not resolved.is_file():
            return ToolResult.error(f"Not a regular file: {params.path}")

        size = resolved.stat().st_size
        if size > self._max_bytes:
            return ToolResult.error(
                f"File too large: {size} bytes (max {self._max_bytes} bytes)"
            )

        if self._is_binary(resolved):
            return ToolResult.error(f"Binary file cannot be read as text: {params.path}")

        text = resolved.read_text(encoding=params.encoding)
        return ToolResult.ok(
            text,
            metadata={
                "path": str(resolved),
                "size": size,
                "lines": len(text.splitlines()),
            },
        )

    def _validate_path(self, path_str: str) -> None:
        """Reject traversal patterns and paths outside the allowed directory."""
        normalized = os.path.normpath(path_str)
        if ".." in normalized.split(os.sep):
            msg = f"Path traversal not allowed: {path_str}"
            raise ToolValidationError(msg, tool_name=self.name)

        if self._allowed_dir is None:
            return
        # resolve() follows symlinks, so a link escaping the directory is caught here
        real = Path(path_str).resolve()
        if not self._is_within(real, self._allowed_dir):
            msg = f"Path is outside allowed directory: {path_str}"
            raise ToolValidationError(msg, tool_name=self.name)

    def _is_within(self, path: Path, directory: Path) -> bool:
        try:
            path.relative_to(directory)
        except ValueError:
            return False
        return True

    def _is_binary(self, path: Path) -> bool:
        with path.open("rb") as f:
            chunk = f.read(8192)
        return b"\x00" in chunk
