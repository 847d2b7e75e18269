"""Logging setup for modtool.

One root handler (stdout or a file) with either a plain text format or one
JSON object per line. Modules log through ``logging.getLogger(__name__)``;
packaging runs can attach context (mod id, source directory) with
get_logger().
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import functools
import json
import logging
import sys
import time
from typing import Any, ParamSpec, TypeVar

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# LogRecord attributes that never go into the JSON context
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredJSONFormatter(logging.Formatter):
    """Renders a record as a single JSON line.

    Shape::

        {"level": "INFO", "message": "...", "timestamp": "<ISO 8601, UTC>",
         "context": {"logger_name": ..., "module": ..., "function": ...,
                     "line": ..., <extra fields>}}

    Values that are not JSON types (paths, enums) are written with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "context": self._context(record),
        }
        return json.dumps(entry, default=str)

    def _context(self, record: logging.LogRecord) -> dict[str, Any]:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            context["error_type"] = exc_type.__name__ if exc_type else None
            context["error_message"] = str(exc) if exc else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        # extra= kwargs and LoggerAdapter context
        context.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        return context


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Install the root handler, replacing any previous configuration.

    Args:
        level: Level name, case-insensitive
        format_string: Text format; DEFAULT_FORMAT when None, unused when structured
        filename: Log file; stdout when None
        structured: Emit JSON lines instead of text

    Example:
        >>> configure_logging(level="debug", structured=True, filename="modtool.jsonl")
    """
    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stdout)
    )
    if structured:
        handler.setFormatter(StructuredJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return the named logger, wrapped in a LoggerAdapter when context is given.

    Example:
        >>> log = get_logger(__name__, mod_id="test_mod")
        >>> log.info("packed")  # record carries mod_id
    """
    named = logging.getLogger(name)
    return logging.LoggerAdapter(named, context) if context else named


def log_duration(func: Callable[P, R]) -> Callable[P, R]:
    """Log how long each call took, at debug level, even when it raises."""

    @functools.wraps(func)
    def wrapper_timer(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__!r} took {elapsed:.4f} seconds")

    return wrapper_timer
