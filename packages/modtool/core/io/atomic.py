"""Atomic output files.

Content is written to a temporary file next to the target and moved into
place only when the writer finishes without error, so readers never observe
a partially written archive.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import os
from pathlib import Path
import tempfile
from typing import BinaryIO

from modtool.core.errors import FileIOError

logger = logging.getLogger(__name__)


def temp_path_prefix(target: Path) -> str:
    """Prefix used for temporary files created for target."""
    return f".{target.name}."


@contextmanager
def atomic_output(target: Path | str) -> Iterator[BinaryIO]:
    """
    Open a temporary binary file that replaces target on success.

    The temporary file lives in target's directory (same filesystem) and is
    removed if the block raises.

    Args:
        target: Final output path

    Yields:
        Writable, seekable binary file; its ``name`` is the temporary path

    Raises:
        FileIOError: If the temporary file cannot be created or moved into place
    """
    target = Path(target)
    try:
        handle = tempfile.NamedTemporaryFile(
            mode="w+b",
            dir=target.parent,
            prefix=temp_path_prefix(target),
            suffix=".tmp",
            delete=False,
        )
    except OSError as e:
        raise FileIOError(target, e) from e

    temp_path = Path(handle.name)
    try:
        yield handle  # type: ignore[misc]
    except BaseException:
        _discard(handle, temp_path)
        raise

    try:
        handle.flush()
        os.fsync(handle.fileno())
        handle.close()
        os.replace(temp_path, target)
    except OSError as e:
        _discard(handle, temp_path)
        raise FileIOError(target, e) from e

    logger.debug(f"Wrote {target} atomically")


def _discard(handle: BinaryIO, temp_path: Path) -> None:
    handle.close()
    temp_path.unlink(missing_ok=True)
