"""Mod packaging pipeline.

Composes configuration parsing, ignore resolution, tree traversal, and
archive writing into one operation.

Example:
    >>> from modtool.core.packaging import package_mod
    >>> summary = package_mod("my_mod", "dist/my_mod.zip")
"""

from modtool.core.packaging.api import package_mod
from modtool.core.packaging.models import EntryAction, PackagingSummary, PlannedEntry
from modtool.core.packaging.writer import STEP_COUNT, ModFileWriter

__all__ = [
    "EntryAction",
    "ModFileWriter",
    "PackagingSummary",
    "PlannedEntry",
    "STEP_COUNT",
    "package_mod",
]
