"""Structured logging with key/value fields."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

_PRODUCTION_MODES = frozenset({"prod", "production"})

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


class _DevelopmentFormatter(logging.Formatter):
    """Tab-separated console lines with fields as trailing JSON."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%dT%H:%M:%S")
        line = f"{timestamp}\t{_level_name(record).upper()}\t{record.getMessage()}"
        fields = getattr(record, "fields", None)
        if fields:
            line += "\t" + json.dumps(fields, default=str)
        return line


class _JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record),
            "ts": record.created,
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "fields", None) or {})
        return json.dumps(entry, default=str)


@dataclass(frozen=True)
class Logger:
    """A logger that attaches key/value fields to every entry."""

    backend: logging.Logger
    fields: dict[str, Any] = field(default_factory=dict)

    def _log(self, level: int, msg: str, extra_fields: dict[str, Any]) -> None:
        self.backend.log(level, msg, extra={"fields": {**self.fields, **extra_fields}})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warn(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def fatal(self, msg: str, **kwargs: Any) -> None:
        """Log at fatal level, flush, and exit with status 1."""
        self._log(logging.CRITICAL, msg, kwargs)
        self.sync()
        raise SystemExit(1)

    def bind(self, **kwargs: Any) -> Logger:
        """Return a logger that adds ``kwargs`` to every entry."""
        return Logger(self.backend, {**self.fields, **kwargs})

    def sync(self) -> None:
        """Flush all handlers."""
        for handler in self.backend.handlers:
            handler.flush()


def new(mode: str) -> Logger:
    """Build a debug-level logger writing to stderr.

    ``prod`` or ``production`` (any case) selects JSON output; any other
    mode selects human-readable console output.
    """
    backend = logging.Logger("slotter", logging.DEBUG)
    handler = logging.StreamHandler()
    if mode.lower() in _PRODUCTION_MODES:
        handler.setFormatter(_JSONFormatter())
    else:
        handler.setFormatter(_DevelopmentFormatter())
    backend.addHandler(handler)
    return Logger(backend)