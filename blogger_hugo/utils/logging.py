"""
Logging for conversion runs.

Console output goes through rich. An optional log file in the target
directory gets one line per record, either JSONL or plain text. Structured
fields travel on the record through ``extra``: pipeline events carry an
``event`` name plus counts, and the core modules attach entry ids and
reasons to the records they emit (``orphan_comment``, ``post_id_skipped``,
``duplicate_post_id``, ``unreachable_comments``).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig

LOGGER_NAME = "blogger_hugo"

# Attributes every LogRecord has; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def setup_logging(cfg: LoggingConfig, output_dir: Path | None) -> logging.Logger:
    """Configure the package logger for one run and return it.

    Module loggers (``blogger_hugo.core.tree`` and friends) propagate into
    it. Handlers left over from an earlier run in the same process are
    closed first.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_string(cfg.level)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if cfg.console:
        console_handler = RichHandler(show_time=False, show_path=False)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    if cfg.file and output_dir is not None:
        file_handler = logging.FileHandler(output_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonlFormatter() if cfg.format == "jsonl" else PlainFormatter())
        logger.addHandler(file_handler)

    return logger


def log_event(
    logger: logging.Logger | None,
    event: str,
    message: str | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log a named pipeline event; ``fields`` become structured keys."""
    if logger is None:
        return
    logger.log(level, message or event.replace("_", " "), extra={"event": event, **fields})


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the structured fields attached to a record."""
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}


class JsonlFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message, then fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class PlainFormatter(logging.Formatter):
    """Text lines with the structured fields appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = record_fields(record)
        if not fields:
            return line
        return line + " " + " ".join(f"{key}={value}" for key, value in fields.items())


def _level_from_string(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO
