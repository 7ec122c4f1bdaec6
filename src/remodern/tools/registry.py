"""Tool registry — the catalogue and sole execution gateway for tools.

Provides registration, lookup, listing, and execution of tools
that implement the :class:`Tool` protocol.  One registry is built at
process start and shared by every front end (CLI and protocol server).
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from remodern.core.errors import (
    ToolAlreadyRegisteredError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from remodern.tools.base import BaseTool, ToolDefinition

if TYPE_CHECKING:
    from collections.abc import Mapping

    from remodern.tools.base import Tool, ToolResult

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Concurrency-safe registry of tools keyed by name.

    Reads never block.  Writers (register, unregister, clear) serialize
    on a lock so that check-then-insert is atomic: of N concurrent
    registrations under one name exactly one wins.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._lock = threading.Lock()

    # ── Mutation ─────────────────────────────────────────────

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Raises:
            ValueError: If the tool is None or its name is empty.
            ToolAlreadyRegisteredError: If the name is already taken.
                The registry keeps the first-registered tool.
        """
        if tool is None:
            msg = "Tool cannot be None"
            raise ValueError(msg)
        name = tool.name
        if not isinstance(name, str) or not name:
            msg = "Tool name must be a non-empty string"
            raise ValueError(msg)
        with self._lock:
            if name in self._tools:
                raise ToolAlreadyRegisteredError(name)
            self._tools[name] = tool
        logger.debug("Registered tool %s", name)

    def unregister(self, name: str) -> bool:
        """Remove a tool. Returns whether anything was removed."""
        with self._lock:
            removed = self._tools.pop(name, None) is not None
        if removed:
            logger.debug("Unregistered tool %s", name)
        return removed

    def clear(self) -> None:
        """Remove every tool. Intended for test isolation."""
        with self._lock:
            self._tools.clear()

    # ── Lookup ───────────────────────────────────────────────

    def get(self, name: str) -> Tool | None:
        """Return the tool registered under *name*, or None."""
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def _snapshot(self) -> dict[str, Tool]:
        return self._tools.copy()

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return list(self._snapshot())

    def list_tools(self) -> list[Tool]:
        """Return all registered tools as an independent list."""
        return list(self._snapshot().values())

    def list_definitions(self) -> list[ToolDefinition]:
        """Return discovery definitions for all registered tools."""
        return [
            ToolDefinition(
                name=t.name,
                description=t.description,
                input_schema=t.input_schema,
            )
            for t in self.list_tools()
        ]

    def size(self) -> int:
        return len(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    # ── Execution ────────────────────────────────────────────

    async def execute(self, name: str, args: Mapping[str, Any] | None) -> ToolResult:
        """Resolve, validate, and run a tool.

        The result is returned unchanged.  A tool removed after
        resolution still completes this call.  Arguments are validated
        once; a :class:`BaseTool` runs on the parameters that validation
        produced.

        Raises:
            ToolNotFoundError: If no tool is registered under *name*.
            ToolError: From the tool's validation or execution.  Any other
                exception escaping the tool is wrapped as
                :class:`ToolExecutionError`.
        """
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        try:
            params = tool.validate_args(args)
            if isinstance(tool, BaseTool):
                return await tool.execute_validated(params)
            return await tool.execute(args if args is not None else {})
        except ToolError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            raise
        except Exception as exc:
            logger.warning("Tool %s raised %s: %s", name, type(exc).__name__, exc)
            raise ToolExecutionError(
                f"Unexpected error in tool {name}: {exc}", tool_name=name, cause=exc
            ) from exc

    async def invoke(
        self, name: str, args: Mapping[str, Any] | None
    ) -> ToolResult | ToolError:
        """Like :meth:`execute`, but return the ToolError instead of raising."""
        try:
            return await self.execute(name, args)
        except ToolError as exc:
            return exc
