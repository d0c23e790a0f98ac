"""Logging setup for the forktrack CLI and library."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAMES = ("forktrack_core", "forktrack")
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}
_HANDLER_ATTR = "_forktrack_handler"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _build_handler(fmt: str) -> logging.Handler:
    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLineFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
    setattr(handler, _HANDLER_ATTR, True)
    return handler


def configure_logging(level: str = "warn", fmt: str = "text") -> None:
    """Attach a stderr handler to the forktrack loggers, replacing any previous one."""
    numeric = _LEVELS.get(level, logging.WARNING)
    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if getattr(existing, _HANDLER_ATTR, False):
                logger.removeHandler(existing)
        logger.addHandler(_build_handler(fmt))
        logger.setLevel(numeric)
