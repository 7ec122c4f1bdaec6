"""Line-level JSON-RPC framing: request parsing and response envelopes.

Requests are one JSON object per line.  Error codes and the
``Tool``/``TextContent``/``ErrorData`` shapes come from ``mcp.types``.
"""

from __future__ import annotations

import json
from typing import Any

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorData,
    TextContent,
    Tool,
)
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from remodern.core.errors import ProtocolError
from remodern.tools.base import ToolDefinition

JSONRPC_VERSION = "2.0"

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "JSONRPC_VERSION",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "Request",
    "encode_response",
    "error_response",
    "parse_request",
    "success_response",
    "text_content",
    "tool_entry",
]


class Request(BaseModel):
    """One decoded request line."""

    model_config = ConfigDict(extra="allow")

    method: StrictStr
    id: Any = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        """True when the line carried no ``id`` key at all."""
        return "id" not in self.model_fields_set


def parse_request(line: str) -> Request:
    """Decode a request line.

    Raises:
        ProtocolError: ``PARSE_ERROR`` for invalid or too deeply nested
            JSON, ``INVALID_REQUEST``
            for JSON that is not a well-formed request object.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise ProtocolError(PARSE_ERROR, f"Parse error: {e.msg}") from e
    except RecursionError as e:
        raise ProtocolError(PARSE_ERROR, "Parse error: nesting too deep") from e

    if not isinstance(data, dict):
        msg = f"Invalid request: expected a JSON object, got {type(data).__name__}"
        raise ProtocolError(INVALID_REQUEST, msg)

    try:
        return Request.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ProtocolError(
            INVALID_REQUEST,
            f"Invalid request: bad or missing {fields}",
            request_id=data.get("id"),
        ) from e


def success_response(request_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(
    request_id: Any, code: int, message: str, data: Any = None
) -> dict[str, Any]:
    error = ErrorData(code=code, message=message, data=data)
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error.model_dump(exclude_none=True),
    }


def text_content(text: str) -> dict[str, Any]:
    return TextContent(type="text", text=text).model_dump(exclude_none=True, by_alias=True)


def tool_entry(definition: ToolDefinition) -> dict[str, Any]:
    """Project a tool definition to the ``tools/list`` entry shape."""
    tool = Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema,
    )
    return tool.model_dump(exclude_none=True, by_alias=True)


def encode_response(response: dict[str, Any]) -> str:
    """Serialize a response as a single line (no trailing newline)."""
    return json.dumps(response, default=str, separators=(",", ":"))
