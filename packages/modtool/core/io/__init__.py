"""Filesystem helpers for modtool.

Provides lazy source-tree traversal and atomic output files.

Example:
    >>> from modtool.core.io import atomic_output, walk_tree
    >>> for entry in walk_tree("my_mod"):
    ...     print(entry.path, entry.kind)
    >>> with atomic_output("my_mod.zip") as sink:
    ...     sink.write(b"...")
"""

from .atomic import atomic_output
from .models import EntryKind, WalkEntry
from .walk import walk_tree

__all__ = [
    "EntryKind",
    "WalkEntry",
    "atomic_output",
    "walk_tree",
]
