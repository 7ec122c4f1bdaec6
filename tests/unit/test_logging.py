"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from remodern.config.schema import LoggingConfig
from remodern.logging_setup import JsonFormatter, configure_logging


class TestConfigureLogging:
    def test_level_applied(self) -> None:
        logger = configure_logging(LoggingConfig(level="debug"))
        assert logger.name == "remodern"
        assert logger.level == logging.DEBUG

    def test_single_handler_after_repeat_calls(self) -> None:
        configure_logging(LoggingConfig())
        logger = configure_logging(LoggingConfig())
        assert len(logger.handlers) == 1

    def test_never_writes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingConfig(level="INFO"))
        logging.getLogger("remodern.tools.registry").info("hello stderr")
        captured = capsys.readouterr()
        assert captured.out == ""

    def test_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "remodern.log"
        configure_logging(LoggingConfig(file=str(log_file)))
        logging.getLogger("remodern.mcp.server").warning("to file")
        for handler in logging.getLogger("remodern").handlers:
            handler.flush()
        assert "to file" in log_file.read_text()

    def test_structured_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "structured.log"
        configure_logging(LoggingConfig(file=str(log_file), structured=True))
        logging.getLogger("remodern.cli").error("json please")
        for handler in logging.getLogger("remodern").handlers:
            handler.flush()
        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["message"] == "json please"
        assert record["level"] == "ERROR"
        assert record["logger"] == "remodern.cli"


class TestJsonFormatter:
    def test_includes_exception(self) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "remodern", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        payload = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad" in payload["exc_info"]
