"""Logging setup from :class:`LoggingConfig`.

Log output never goes to stdout: the protocol server writes its
responses there.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from remodern.config.schema import LoggingConfig

_HANDLER_NAME = "remodern"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Install a single handler on the ``remodern`` logger.

    Calling this again replaces the handler installed previously.
    """
    root = logging.getLogger("remodern")

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()

    handler: logging.Handler
    if config.file:
        handler = logging.FileHandler(config.file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JsonFormatter() if config.structured else logging.Formatter(_PLAIN_FORMAT)
    )

    root.addHandler(handler)
    root.setLevel(config.level)
    root.propagate = False
    return root
