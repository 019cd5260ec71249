# plancompare/utils/logging.py
"""
Logging configuration for the plan comparison engine.

Library modules only ever do `logger = logging.getLogger(__name__)`.
Whoever embeds the engine (a CLI, a notebook, a web service) calls
setup_logging() once to decide where those records go.

Usage:
    from plancompare.utils import setup_logging

    setup_logging()                              # LOG_LEVEL / LOG_FORMAT from env
    setup_logging(level="DEBUG", log_format="json")

What gets logged where:
    DEBUG   - Skipped contributions, thresholds not met, lookup misses
    INFO    - Comparison runs, provider fetches, portfolio file I/O
    WARNING - XIRR non-convergence, provider retries
    ERROR   - Provider failures inside a batch fetch
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from plancompare.config import settings

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP client internals log every request at DEBUG/INFO
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Attributes every LogRecord has; anything else arrived through `extra=`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


# =============================================================================
# JSON FORMATTER
# =============================================================================

def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed via `extra=`, stringified when not JSON-serializable."""
    extras: dict[str, Any] = {}
    for key, value in vars(record).items():
        if key in _RESERVED_ATTRS:
            continue
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            value = str(value)
        extras[key] = value
    return extras


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line:

        {"timestamp": "2024-06-30T09:15:02.481000+00:00", "level": "INFO",
         "logger": "plancompare.services.analytics.service",
         "message": "Comparing 3 investments as of 2024-06-30 (benchmark=yes)",
         "extra": {...}}

    "exception" and "extra" appear only when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        extras = _record_extras(record)
        if extras:
            entry["extra"] = extras

        return json.dumps(entry)


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        suppress_noisy_loggers: bool = True,
        stream: TextIO | None = None,
) -> logging.Handler:
    """
    Route all log records to a single stream handler on the root logger.

    Calling it again replaces the previous configuration.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: settings.log_level)
        log_format: "text" or "json" (default: settings.log_format)
        suppress_noisy_loggers: Raise HTTP client loggers to WARNING
        stream: Output stream (default: sys.stdout)

    Returns:
        The installed handler

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = level or settings.log_level
    format_type = (log_format or settings.log_format).lower()

    handler = logging.StreamHandler(stream or sys.stdout)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_TEXT_FORMAT, DEFAULT_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(_get_log_level(level_name))
    root.handlers.clear()
    root.addHandler(handler)

    if suppress_noisy_loggers:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={level_name}, format={format_type}"
    )
    return handler


def _get_log_level(level_name: str) -> int:
    """
    Map a level name (case-insensitive) to its logging constant.

    Raises:
        ValueError: If the name is not a known level
    """
    key = level_name.strip().upper()
    if key not in _LEVELS:
        raise ValueError(
            f"Invalid log level: '{level_name}'. Valid levels are: {', '.join(_LEVELS)}"
        )
    return _LEVELS[key]
