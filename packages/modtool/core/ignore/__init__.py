"""Ignore-pattern resolution for mod source trees."""

from .matcher import DEFAULT_IGNORE_FILE, IgnoreSet, build_ignore_set

__all__ = [
    "DEFAULT_IGNORE_FILE",
    "IgnoreSet",
    "build_ignore_set",
]
