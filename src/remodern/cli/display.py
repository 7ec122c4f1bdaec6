"""Rich display for tool listings and results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from remodern.tools.base import ToolDefinition, ToolResult


class ToolDisplay:
    """Renders registry listings and tool results.

    Accepts an optional :class:`~rich.console.Console` for dependency
    injection in tests.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def show_tools(self, definitions: list[ToolDefinition]) -> None:
        if not definitions:
            self._console.print("No tools registered.")
            return
        table = Table(title="Available tools", show_lines=False)
        table.add_column("Name", style="bold cyan", no_wrap=True)
        table.add_column("Description")
        for d in sorted(definitions, key=lambda d: d.name):
            table.add_row(d.name, d.description)
        self._console.print(table)

    def show_result(self, result: ToolResult) -> None:
        """Print a successful result: content, then metadata, then artifacts."""
        self._console.print("[bold green]Success:[/bold green]")
        self._console.print(result.content or "", markup=False, highlight=False)

        if result.metadata:
            self._console.print()
            self._console.print("[bold]Metadata:[/bold]")
            for key, value in result.metadata.items():
                self._console.print(f"  {key}: {value}", markup=False, highlight=False)

        if result.artifacts:
            self._console.print()
            self._console.print("[bold]Generated files:[/bold]")
            for artifact in result.artifacts:
                self._console.print(f"  {artifact}", markup=False, highlight=False)
