"""Line-delimited MCP server over a registry of tools.

The :class:`Dispatcher` reads one JSON-RPC request per line, routes it
to the :class:`ToolRegistry`, and writes exactly one response line per
request.  A malformed line or a failing request never ends the loop;
end of input does.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, Any

from mcp.types import ErrorData

from remodern.config.schema import ServerConfig
from remodern.core.errors import (
    ProtocolError,
    ToolError,
    ToolNotFoundError,
    ToolValidationError,
)
from remodern.mcp.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    Request,
    encode_response,
    error_response,
    parse_request,
    success_response,
    text_content,
    tool_entry,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import TextIO

    from remodern.tools.base import ToolResult
    from remodern.tools.registry import ToolRegistry

    Handler = Callable[[dict[str, Any]], Awaitable["dict[str, Any] | ErrorData"]]

logger = logging.getLogger(__name__)


class Dispatcher:
    """Translates request lines into registry calls and back.

    One dispatcher serves one stream pair, strictly request-then-response.
    Several dispatchers may share a registry.
    """

    def __init__(self, registry: ToolRegistry, server: ServerConfig | None = None) -> None:
        self._registry = registry
        self._server = server or ServerConfig()
        self._handlers: dict[str, Handler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    # ── Loop ─────────────────────────────────────────────────

    async def serve(self, reader: TextIO, writer: TextIO) -> None:
        """Process *reader* line by line until end of input.

        A text reader backed by a byte buffer (``sys.stdin``) is read
        through that buffer, so each line is decoded on its own and an
        undecodable line costs only itself.
        """
        logger.info("Serving tools: %s", ", ".join(sorted(self._registry.list_names())))
        source = getattr(reader, "buffer", reader)
        while True:
            try:
                line = await asyncio.to_thread(source.readline)
            except UnicodeDecodeError as exc:
                logger.warning("Undecodable input line: %s", exc.reason)
                response: dict[str, Any] | None = _undecodable(exc)
            else:
                if not line:
                    break
                try:
                    response = await self.handle_line(line)
                except Exception as exc:
                    logger.exception("Error processing input line")
                    response = error_response(
                        None, INTERNAL_ERROR, f"Internal server error: {exc}"
                    )
            if response is None:
                continue
            writer.write(self._encode(response) + "\n")
            writer.flush()
        logger.info("Input closed, server stopping")

    def _encode(self, response: dict[str, Any]) -> str:
        try:
            return encode_response(response)
        except (TypeError, ValueError):
            logger.exception("Response is not serializable")
            return encode_response(
                error_response(
                    response.get("id"),
                    INTERNAL_ERROR,
                    "Internal server error: response is not serializable",
                )
            )

    async def handle_line(self, line: str | bytes) -> dict[str, Any] | None:
        """Handle one input line, raw UTF-8 bytes or text.

        Returns the response, or None for blank lines and notifications.
        """
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                logger.warning("Undecodable input line: %s", exc.reason)
                return _undecodable(exc)
        if not line.strip():
            return None
        try:
            request = parse_request(line)
        except ProtocolError as exc:
            logger.warning("Rejected request line: %s", exc.message)
            return error_response(exc.request_id, exc.code, exc.message)
        return await self.handle_request(request)

    async def handle_request(self, request: Request) -> dict[str, Any] | None:
        if request.is_notification and request.method.startswith("notifications/"):
            logger.debug("Notification %s", request.method)
            return None

        handler = self._handlers.get(request.method)
        if handler is None:
            return error_response(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        try:
            outcome = await handler(request.params or {})
        except Exception as exc:
            logger.exception("Error handling %s", request.method)
            return error_response(
                request.id, INTERNAL_ERROR, f"Internal server error: {exc}"
            )

        if isinstance(outcome, ErrorData):
            return error_response(request.id, outcome.code, outcome.message, outcome.data)
        return success_response(request.id, outcome)

    # ── Methods ──────────────────────────────────────────────

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        return {
            "protocolVersion": self._server.protocol_version,
            "capabilities": {"tools": {"listChanged": True}},
            "serverInfo": {
                "name": self._server.name,
                "version": self._server.version,
            },
        }

    async def _ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [tool_entry(d) for d in self._registry.list_definitions()]}

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any] | ErrorData:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            return ErrorData(
                code=INVALID_PARAMS, message="tools/call requires a non-empty 'name'"
            )
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            return ErrorData(
                code=INVALID_PARAMS, message="tools/call 'arguments' must be an object"
            )

        outcome = await self._registry.invoke(name, arguments)
        if isinstance(outcome, ToolError):
            return _tool_error_data(outcome)
        return _call_result(outcome)


def _undecodable(exc: UnicodeDecodeError) -> dict[str, Any]:
    return error_response(None, PARSE_ERROR, f"Parse error: invalid UTF-8 ({exc.reason})")


def _call_result(result: ToolResult) -> dict[str, Any]:
    if not result.success:
        return {
            "content": [text_content(f"Error: {result.error_message}")],
            "isError": True,
        }
    payload: dict[str, Any] = {"content": [text_content(result.content or "")]}
    if result.metadata is not None or result.artifacts:
        meta = dict(result.metadata or {})
        if result.artifacts:
            meta["artifacts"] = list(result.artifacts)
        payload["meta"] = meta
    return payload


def _tool_error_data(error: ToolError) -> ErrorData:
    if isinstance(error, (ToolNotFoundError, ToolValidationError)):
        code = INVALID_PARAMS
    else:
        code = INTERNAL_ERROR
    data = {
        key: value
        for key, value in (("toolName", error.tool_name), ("errorCode", error.error_code))
        if value is not None
    }
    return ErrorData(
        code=code,
        message=f"Tool execution failed: {error.message}",
        data=data or None,
    )


async def run_server(registry: ToolRegistry, server: ServerConfig | None = None) -> None:
    """Serve the registry on stdin/stdout."""
    dispatcher = Dispatcher(registry, server)
    await dispatcher.serve(sys.stdin, sys.stdout)
