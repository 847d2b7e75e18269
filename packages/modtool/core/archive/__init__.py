"""Zip archive writing for packaged mods.

Example:
    >>> from modtool.core.archive import ArchiveWriter, to_archive_name
    >>> with open("mod.zip", "wb") as sink, ArchiveWriter(sink) as archive:
    ...     archive.start_file(to_archive_name("data.txt"))
    ...     archive.write_all(b"hello")
"""

from .models import CompressionMethod, CompressionOptions
from .writer import ArchiveWriter, to_archive_name

__all__ = [
    "ArchiveWriter",
    "CompressionMethod",
    "CompressionOptions",
    "to_archive_name",
]
