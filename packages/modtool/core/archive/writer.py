"""Zip archive writer used by the packaging pipeline.

Wraps ``zipfile.ZipFile`` over a caller-supplied binary sink and exposes the
small set of operations the orchestrator needs. Codec failures are translated
into the packaging error taxonomy.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
import time
from types import TracebackType
from typing import IO, BinaryIO, Self
import zipfile

from modtool.core.archive.models import CompressionOptions
from modtool.core.errors import ArchiveError, ArchiveWriteError

logger = logging.getLogger(__name__)

# zipfile raises these for format violations (duplicate handles, oversize entries, ...)
_FORMAT_ERRORS = (ValueError, RuntimeError, zipfile.BadZipFile, zipfile.LargeZipFile)


def to_archive_name(relative_path: PurePath | str, is_directory: bool = False) -> str:
    """Convert a root-relative path into a canonical zip entry name.

    Entry names always use ``/`` separators so that identical trees produce
    identical names on every platform. Directory names end with ``/``.

    Args:
        relative_path: Path relative to the source root
        is_directory: Whether the entry is a directory

    Returns:
        Canonical archive entry name

    Raises:
        ArchiveError: If the path is empty, absolute, or escapes the root

    Example:
        >>> to_archive_name(PureWindowsPath("textures\\\\grass.png"))
        'textures/grass.png'
        >>> to_archive_name("scripts", is_directory=True)
        'scripts/'
    """
    if isinstance(relative_path, PureWindowsPath):
        path = PurePosixPath(*relative_path.parts)
    else:
        path = PurePosixPath(PurePath(relative_path).as_posix())

    if path.is_absolute() or (isinstance(relative_path, PureWindowsPath) and relative_path.anchor):
        raise ArchiveError(f"entry name must be relative: {relative_path}")
    if ".." in path.parts:
        raise ArchiveError(f"entry name must not escape the archive root: {relative_path}")

    name = path.as_posix()
    if name in ("", "."):
        raise ArchiveError("entry name must not be empty")

    return f"{name}/" if is_directory else name


class ArchiveWriter:
    """
    Sequential zip writer over a binary sink.

    At most one file entry is open at a time; starting a new entry or adding
    a directory closes the previous one. The sink is never closed by the
    writer. Call finish() (or use the writer as a context manager) to write
    the central directory; an abandoned writer leaves an unusable archive.
    """

    def __init__(self, sink: BinaryIO, options: CompressionOptions | None = None) -> None:
        """
        Initialize the archive writer.

        Args:
            sink: Writable (ideally seekable) binary stream
            options: Default compression options for all entries

        Raises:
            ArchiveError: If the sink cannot host a zip archive
            ArchiveWriteError: If the sink fails on I/O
        """
        self.options = options or CompressionOptions()
        self._entry: IO[bytes] | None = None
        self._entry_name: str | None = None
        self._finished = False
        self._entry_count = 0
        try:
            self._zip = zipfile.ZipFile(
                sink,
                mode="w",
                compression=self.options.method.zip_constant,
                compresslevel=self.options.level,
            )
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e

    @property
    def entry_count(self) -> int:
        """Number of entries started so far (files and directories)."""
        return self._entry_count

    def set_comment(self, text: str) -> None:
        """Attach a UTF-8 comment to the archive.

        Raises:
            ArchiveError: If the encoded comment exceeds the zip limit (65535 bytes)
        """
        self._ensure_open()
        comment = text.encode("utf-8")
        if len(comment) > zipfile.ZIP_MAX_COMMENT:
            raise ArchiveError(
                f"archive comment is {len(comment)} bytes, "
                f"the limit is {zipfile.ZIP_MAX_COMMENT}"
            )
        self._zip.comment = comment

    def start_file(self, name: str, options: CompressionOptions | None = None) -> None:
        """
        Begin a new file entry; subsequent write_all() calls append to it.

        Args:
            name: Canonical entry name (see to_archive_name)
            options: Per-entry compression override (method only)
        """
        self._ensure_open()
        self._close_entry()
        try:
            if options is None or options.method == self.options.method:
                self._entry = self._zip.open(name, mode="w")
            else:
                info = zipfile.ZipInfo(name, date_time=time.localtime(time.time())[:6])
                info.compress_type = options.method.zip_constant
                self._entry = self._zip.open(info, mode="w")
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e
        self._entry_name = name
        self._entry_count += 1
        logger.debug(f"Started archive entry {name!r}")

    def write_all(self, data: bytes | bytearray | memoryview) -> None:
        """Append bytes to the currently open file entry."""
        if self._entry is None:
            raise ArchiveError("no file entry is open")
        try:
            self._entry.write(data)
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e

    def add_directory(self, name: str, options: CompressionOptions | None = None) -> None:
        """
        Write a zero-length directory entry.

        Args:
            name: Entry name; a trailing ``/`` is added when missing
            options: Accepted for interface symmetry; directories are stored
        """
        self._ensure_open()
        self._close_entry()
        if not name.endswith("/"):
            name = f"{name}/"
        try:
            self._zip.mkdir(name)
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e
        self._entry_count += 1
        logger.debug(f"Added archive directory {name!r}")

    def finish(self) -> None:
        """Close the open entry and write the central directory.

        Safe to call more than once. The sink stays open.
        """
        if self._finished:
            return
        self._close_entry()
        try:
            self._zip.close()
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e
        self._finished = True

    def _close_entry(self) -> None:
        if self._entry is None:
            return
        entry, self._entry = self._entry, None
        try:
            entry.close()
        except OSError as e:
            raise ArchiveWriteError(e) from e
        except _FORMAT_ERRORS as e:
            raise ArchiveError(e) from e
        finally:
            self._entry_name = None

    def _ensure_open(self) -> None:
        if self._finished:
            raise ArchiveError("archive is already finished")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # A failed run is abandoned unfinished; callers discard the output.
        if exc_type is None:
            self.finish()
