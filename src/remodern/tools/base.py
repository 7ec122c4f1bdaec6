"""Tool protocol and data types.

Defines the ``Tool`` protocol that all tool implementations must
satisfy, the immutable ``ToolResult`` they return, and ``BaseTool``,
which derives a tool's input schema and argument validation from a
pydantic parameter model.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

from remodern.core.errors import ToolError, ToolExecutionError, ToolValidationError


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of one tool invocation.

    Use the :meth:`ok`, :meth:`with_artifacts` and :meth:`error`
    constructors.  ``content``/``metadata``/``artifacts`` are meaningful
    when ``success`` is true, ``error_message`` when it is false.
    """

    success: bool
    content: str | None = None
    metadata: Mapping[str, Any] | None = None
    artifacts: tuple[str, ...] | None = None
    error_message: str | None = None
    is_text: bool = True

    def __post_init__(self) -> None:
        if self.metadata is not None and not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.artifacts is not None and not isinstance(self.artifacts, tuple):
            object.__setattr__(self, "artifacts", tuple(self.artifacts))

    @classmethod
    def ok(cls, content: str, metadata: Mapping[str, Any] | None = None) -> ToolResult:
        return cls(success=True, content=content, metadata=metadata)

    @classmethod
    def with_artifacts(
        cls,
        content: str,
        artifacts: list[str] | tuple[str, ...],
        metadata: Mapping[str, Any] | None = None,
    ) -> ToolResult:
        return cls(success=True, content=content, metadata=metadata, artifacts=tuple(artifacts))

    @classmethod
    def error(cls, message: str) -> ToolResult:
        return cls(success=False, error_message=message)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view for JSON output."""
        data: dict[str, Any] = {"success": self.success}
        if self.success:
            data["content"] = self.content
            if self.metadata:
                data["metadata"] = dict(self.metadata)
            if self.artifacts:
                data["artifacts"] = list(self.artifacts)
        else:
            data["error"] = self.error_message
        return data


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Discovery view of a tool: what ``tools/list`` advertises."""

    name: str
    description: str
    input_schema: dict[str, Any]


@runtime_checkable
class Tool(Protocol):
    """Protocol that all tool implementations must satisfy."""

    @property
    def name(self) -> str:
        """Unique name for this tool."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's parameters."""
        ...

    def validate_args(self, args: Mapping[str, Any] | None) -> Any:
        """Reject invalid arguments before any side effect.

        Raises:
            ToolValidationError: If the arguments are unacceptable.
        """
        ...

    async def execute(self, args: Mapping[str, Any]) -> ToolResult:
        """Execute the tool with the given arguments.

        Raises:
            ToolError: On execution failure.
        """
        ...


P = TypeVar("P", bound=BaseModel)


class BaseTool(Generic[P]):
    """Base class for tools with a pydantic parameter model.

    Subclasses set ``name``, ``description`` and ``params_model`` and
    implement :meth:`run`, which receives the parsed parameters.
    Implements the :class:`Tool` protocol.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    params_model: ClassVar[type[BaseModel]]

    @property
    def input_schema(self) -> dict[str, Any]:
        schema = self.params_model.model_json_schema()
        schema.pop("title", None)
        return schema

    def validate_args(self, args: Mapping[str, Any] | None) -> P:
        if args is None:
            raise ToolValidationError("Arguments cannot be null", tool_name=self.name)
        if not isinstance(args, Mapping):
            msg = f"Arguments must be an object, got {type(args).__name__}"
            raise ToolValidationError(msg, tool_name=self.name)
        try:
            return self.params_model.model_validate(dict(args))  # type: ignore[return-value]
        except ValidationError as exc:
            raise ToolValidationError(
                _format_validation_error(exc), tool_name=self.name, cause=exc
            ) from exc

    async def execute(self, args: Mapping[str, Any]) -> ToolResult:
        return await self.execute_validated(self.validate_args(args))

    async def execute_validated(self, params: P) -> ToolResult:
        """Run with parameters already returned by :meth:`validate_args`."""
        try:
            return await self.run(params)
        except ToolError:
            raise
        except Exception as exc:
            raise ToolExecutionError(
                f"{self.name} failed: {exc}", tool_name=self.name, cause=exc
            ) from exc

    async def run(self, params: P) -> ToolResult:
        raise NotImplementedError


def _format_validation_error(exc: ValidationError) -> str:
    """Render pydantic errors as ``field: reason`` pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "Invalid arguments: " + "; ".join(parts)
