"""Logging setup for the split-every command line.

The library only emits records through module loggers (chunk boundaries,
dispatch decisions, config loading, all at DEBUG). Handlers are installed by
the CLI, or by the embedding application, with ``setup_logging``. Logs go to
stderr because stdout carries the chunks.

JSON output puts one object per line, with values passed through ``extra=``
(for example ``cursor`` or ``chunk_count``) as top-level keys.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

__all__ = [
    "setup_logging",
    "JSONFormatter",
]

# Attributes every LogRecord carries; anything else came in through extra=
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON objects.

    Example output:
        {"timestamp": "2025-01-15T10:30:00.123Z", "level": "DEBUG",
         "logger": "split_every.lib.chunker", "at": "chunker.py:142",
         "message": "No occurrence after offset 42; emitting tail"}
    """

    def __init__(self, static_fields: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the formatter.

        Args:
            static_fields: Keys added to every record, e.g. {"input": "data.txt"}
        """
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "at": f"{record.filename}:{record.lineno}",
            "message": record.getMessage(),
        }
        payload.update(self.static_fields)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        verbose: Log at DEBUG instead of WARNING
        json_format: Emit JSON lines instead of plain text
        log_file: Also append logs to this file
    """
    level = logging.DEBUG if verbose else logging.WARNING
    formatter: logging.Formatter
    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
