"""Main CLI application.

Click commands for remodern: list-tools, call, echo, read, serve.
Every command goes through one :class:`ToolRegistry` built by
:func:`_setup_tools`.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from typing import TYPE_CHECKING, Any

import click

from remodern import __version__
from remodern.config.loader import load_config
from remodern.core.errors import ConfigError, RemodernError

if TYPE_CHECKING:
    from remodern.config.schema import RemodernConfig
    from remodern.tools.registry import ToolRegistry


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> RemodernConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_tools(config: RemodernConfig) -> ToolRegistry:
    """Build the process registry and register the enabled built-in tools."""
    from remodern.tools.registry import ToolRegistry

    registry = ToolRegistry()

    if config.tools.echo.enabled:
        from remodern.tools.echo import EchoTool

        registry.register(EchoTool(prefix=config.tools.echo.prefix))

    if config.tools.file_read.enabled:
        from remodern.tools.file_read import FileReadTool

        registry.register(
            FileReadTool(
                allowed_dir=config.tools.file_read.allowed_dir,
                max_bytes=config.tools.file_read.max_bytes,
            )
        )

    return registry


def _bootstrap(ctx: click.Context) -> tuple[RemodernConfig, ToolRegistry]:
    """Load config, configure logging, and build the registry once per process."""
    if "registry" not in ctx.obj:
        from remodern.logging_setup import configure_logging

        config = _load_config(ctx.obj["config_path"])
        configure_logging(config.logging)
        ctx.obj["config"] = config
        ctx.obj["registry"] = _setup_tools(config)
    return ctx.obj["config"], ctx.obj["registry"]


def _run_tool(
    ctx: click.Context, name: str, args: dict[str, Any], *, as_json: bool = False
) -> None:
    """Execute a tool through the registry and print its result."""
    from remodern.cli.display import ToolDisplay

    _, registry = _bootstrap(ctx)
    try:
        result = asyncio.run(registry.execute(name, args))
    except RemodernError as e:
        _error(str(e))
        return  # unreachable

    if as_json:
        click.echo(json_mod.dumps(result.to_dict(), indent=2, default=str))
    elif result.success:
        ToolDisplay().show_result(result)

    if not result.success:
        _error(result.error_message or "tool failed")


# ── Group ────────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="remodern")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """remodern - pluggable tools behind one registry.

    Run tools directly from the command line or serve them over
    line-delimited JSON-RPC.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── list-tools ───────────────────────────────────────────────────


@cli.command("list-tools")
@click.pass_context
def list_tools(ctx: click.Context) -> None:
    """List all available tools."""
    from remodern.cli.display import ToolDisplay

    _, registry = _bootstrap(ctx)
    ToolDisplay().show_tools(registry.list_definitions())


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "args_json",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def call(ctx: click.Context, name: str, args_json: str, as_json: bool) -> None:
    """Invoke any registered tool by NAME."""
    try:
        args = json_mod.loads(args_json)
    except json_mod.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e.msg}")
        return  # unreachable
    if not isinstance(args, dict):
        _error("--args must be a JSON object")
        return  # unreachable
    _run_tool(ctx, name, args, as_json=as_json)


# ── per-tool shortcuts ───────────────────────────────────────────


@cli.command()
@click.argument("message")
@click.pass_context
def echo(ctx: click.Context, message: str) -> None:
    """Echo MESSAGE through the echo tool."""
    _run_tool(ctx, "echo", {"message": message})


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--encoding", default="utf-8", show_default=True, help="File encoding.")
@click.pass_context
def read(ctx: click.Context, path: str, encoding: str) -> None:
    """Read a text file through the file_read tool."""
    _run_tool(ctx, "file_read", {"path": path, "encoding": encoding})


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Serve the tools as a line-delimited JSON-RPC server on stdio."""
    from remodern.mcp.server import run_server

    config, registry = _bootstrap(ctx)
    asyncio.run(run_server(registry, config.server))
