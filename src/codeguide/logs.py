"""Logging set-up for the CLI entry points.

Stdout carries the MCP and line-delimited transports, so logs go to a file
or nowhere. Records are JSON lines unless text output is requested.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime

from codeguide.core.errors import ConfigError

APP_NAME = "codeguide"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(app)s %(ver)s] %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "app": getattr(record, "app", APP_NAME),
            "ver": getattr(record, "ver", ""),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class _ContextFilter(logging.Filter):
    def __init__(self, version: str) -> None:
        super().__init__()
        self._version = version

    def filter(self, record: logging.LogRecord) -> bool:
        record.app = APP_NAME
        record.ver = self._version
        return True


def parse_level(level: str) -> int:
    try:
        return _LEVELS[level.lower()]
    except KeyError:
        raise ConfigError(f"invalid log level: {level}") from None


def init_logging(
    level: str = "info",
    log_file: str | None = None,
    *,
    text_format: bool = False,
    version: str = "",
) -> logging.Logger:
    """Configure and return the ``codeguide`` logger. Safe to call repeatedly."""
    root = logging.getLogger(APP_NAME)
    root.setLevel(parse_level(level))
    root.propagate = False
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    handler: logging.Handler
    if log_file:
        try:
            handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to open log file {log_file}: {e}") from e
        if text_format:
            handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
        else:
            handler.setFormatter(JsonFormatter())
    else:
        handler = logging.NullHandler()

    handler.addFilter(_ContextFilter(version))
    root.addHandler(handler)
    return root
