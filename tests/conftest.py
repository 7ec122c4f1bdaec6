"""Shared test fixtures for remodern."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from remodern.tools.registry import ToolRegistry
from tests.fixtures.tools import RecordingEchoTool, ScriptedTool


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture
def echo_tool() -> RecordingEchoTool:
    return RecordingEchoTool()


@pytest.fixture
def populated_registry(registry: ToolRegistry, echo_tool: RecordingEchoTool) -> ToolRegistry:
    registry.register(echo_tool)
    registry.register(ScriptedTool())
    return registry


@pytest.fixture(autouse=True)
def _reset_remodern_logger() -> Iterator[None]:
    """Undo handlers the CLI installs so tests stay independent."""
    yield
    logger = logging.getLogger("remodern")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
