"""Echo tool — returns its input, for connectivity checks."""

from __future__ import annotations

from pydantic import BaseModel, Field

from remodern.tools.base import BaseTool, ToolResult


class EchoParams(BaseModel):
    message: str = Field(description="Text to echo back.")


class EchoTool(BaseTool[EchoParams]):
    name = "echo"
    description = "Echoes input"
    params_model = EchoParams

    def __init__(self, *, prefix: str = "") -> None:
        self._prefix = prefix

    async def run(self, params: EchoParams) -> ToolResult:
        return ToolResult.ok(f"{self._prefix}{params.message}")
