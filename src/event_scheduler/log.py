"""Logging setup for event-scheduler.

All modules log through :mod:`logging` with ``logging.getLogger(__name__)``.
:func:`setup_logging` is called once by the CLI to attach a single stderr
handler with ISO 8601 timestamps and pipe-separated fields.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Marks the handler we own so repeated setup calls reuse it.
_HANDLER_ATTR = "_event_scheduler_handler"

# Chatty HTTP libraries stay at WARNING unless debugging.
_NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger for the CLI.

    Args:
        level: A standard logging level name (``"DEBUG"``, ``"INFO"``...).
            Case-insensitive.
        stream: Where log records are written.  Defaults to ``sys.stderr``
            so stdout stays free for the produced link.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)

    third_party_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    existing = [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]
    if existing:
        for handler in existing:
            handler.setLevel(numeric_level)
        return

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called *name* (normally the caller's ``__name__``)."""
    return logging.getLogger(name)
