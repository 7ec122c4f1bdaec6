"""Exception hierarchy for remodern.

Every module imports from here. The hierarchy is:

    RemodernError
    ├── ToolError(message, tool_name, error_code, cause)
    │   ├── ToolAlreadyRegisteredError
    │   ├── ToolNotFoundError
    │   ├── ToolValidationError
    │   └── ToolExecutionError
    ├── ProtocolError(code)
    └── ConfigError
"""

from __future__ import annotations


class RemodernError(Exception):
    """Base exception for all remodern errors."""


# ─── Tool Errors ──────────────────────────────────────────────


class ToolError(RemodernError):
    """Failure correlated to at most one tool.

    ``tool_name`` is absent for framework-level failures such as an
    unknown tool.  ``error_code`` is a machine-readable tag.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        tool_name: str | None = None,
        error_code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.tool_name = tool_name
        self.error_code = error_code if error_code is not None else self.default_code
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        parts = [type(self).__name__]
        if self.tool_name is not None:
            parts.append(f" [{self.tool_name}]")
        if self.error_code is not None:
            parts.append(f" ({self.error_code})")
        parts.append(f": {self.message}")
        return "".join(parts)


class ToolAlreadyRegisteredError(ToolError):
    """A tool with the same name is already registered."""

    default_code = "DUPLICATE_TOOL"

    def __init__(self, tool_name: str) -> None:
        super().__init__(
            f"Tool with name '{tool_name}' already exists", tool_name=tool_name
        )


class ToolNotFoundError(ToolError):
    """No tool is registered under the requested name."""

    default_code = "TOOL_NOT_FOUND"

    def __init__(self, name: str) -> None:
        self.requested_name = name
        super().__init__(f"Tool not found: {name}")


class ToolValidationError(ToolError):
    """Arguments were rejected before the tool did any work."""

    default_code = "INVALID_ARGUMENTS"


class ToolExecutionError(ToolError):
    """The tool failed after attempting work."""

    default_code = "EXECUTION_FAILED"


# ─── Protocol Errors ──────────────────────────────────────────


class ProtocolError(RemodernError):
    """Malformed request line. Carries a JSON-RPC code.

    ``request_id`` holds the id when one could be read from the line.
    """

    def __init__(self, code: int, message: str, *, request_id: object = None) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(message)


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(RemodernError):
    """Invalid configuration."""
