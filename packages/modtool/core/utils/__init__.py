"""Shared utilities for modtool."""

from modtool.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    log_duration,
)

__all__ = [
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
    "log_duration",
]
