"""Structured JSON logging for notionkit.

Each record is written as one JSON object per line::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "WARNING",
     "logger": "notionkit.transport", "message": "Rate limited by Notion API",
     "method": "POST", "path": "/pages", "attempt": 2}

Modules obtain their logger once at import time and attach structured
fields through :func:`log_event`::

    log = get_logger("notionkit.client")
    log_event(log, logging.INFO, "page created", page_id="abc", blocks=12)
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER_NAME = "notionkit"


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys are ``ts``, ``level``, ``logger`` and ``message``.
    Fields passed as ``extra={"extra_fields": {...}}`` are merged into the
    top level; ``exception`` and ``stack_info`` appear when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if fields:
            entry.update(fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# One handler per configured name keeps get_logger idempotent.
_configured: set[str] = set()


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    *,
    level: int | str = logging.WARNING,
    stream: Any | None = None,
) -> logging.Logger:
    """Return a logger under the ``notionkit`` hierarchy.

    The ``notionkit`` root logger gets a :class:`StructuredFormatter`
    handler on first use; child loggers (``notionkit.converter``, ...)
    propagate to it.  A *stream* may be given to attach a dedicated
    handler to any name, which is how tests capture output.

    Parameters
    ----------
    name:
        Logger name.  Names outside ``notionkit`` are accepted as is.
    level:
        Level applied the first time *name* is configured.  Accepts an
        ``int`` or a case-insensitive level name.
    stream:
        Output stream for a dedicated handler.  Defaults to ``sys.stderr``
        for the root logger.
    """
    logger = logging.getLogger(name)
    is_root = name == ROOT_LOGGER_NAME

    if name not in _configured and (is_root or stream is not None):
        resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        logger.setLevel(resolved)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured.add(name)
    elif not is_root and name.startswith(ROOT_LOGGER_NAME + "."):
        get_logger(ROOT_LOGGER_NAME)

    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """Log *message* at *level* with *fields* as structured JSON keys."""
    logger.log(level, message, exc_info=exc_info, extra={"extra_fields": fields})
