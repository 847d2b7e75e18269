"""Lazy depth-first traversal of a source tree.

Yields entries in preorder (a directory before its contents), children in
name order. Symbolic links are followed by default; link cycles are detected
through the device/inode pairs of the ancestor directories.
"""

from __future__ import annotations

from collections.abc import Iterator
import errno
import os
from pathlib import Path
import stat

from modtool.core.errors import WalkError
from modtool.core.io.models import EntryKind, WalkEntry


def walk_tree(root: Path | str, follow_links: bool = True) -> Iterator[WalkEntry]:
    """
    Walk the tree under root.

    The root itself is not yielded. Errors surface lazily, at the entry where
    enumeration fails.

    Args:
        root: Directory to walk
        follow_links: Follow symbolic links to files and directories

    Yields:
        WalkEntry for every file, directory, and special file under root

    Raises:
        WalkError: If root is missing or not a directory, a directory cannot
            be listed, a link is broken, or a link cycle is found
    """
    root = Path(root)
    try:
        root_stat = os.stat(root, follow_symlinks=True)
    except OSError as e:
        raise WalkError(root, e) from e
    if not stat.S_ISDIR(root_stat.st_mode):
        raise WalkError(root, NotADirectoryError(errno.ENOTDIR, "not a directory", str(root)))

    yield from _walk_dir(root, frozenset({(root_stat.st_dev, root_stat.st_ino)}), follow_links)


def _walk_dir(
    directory: Path, ancestors: frozenset[tuple[int, int]], follow_links: bool
) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as it:
            names = sorted(dirent.name for dirent in it)
    except OSError as e:
        raise WalkError(directory, e) from e

    for name in names:
        path = directory / name
        try:
            is_symlink = path.is_symlink()
            st = os.stat(path, follow_symlinks=follow_links)
        except OSError as e:
            # broken links fail here when following
            raise WalkError(path, e) from e

        key = (st.st_dev, st.st_ino)
        if stat.S_ISDIR(st.st_mode):
            if key in ancestors:
                raise WalkError(
                    path,
                    OSError(errno.ELOOP, "file system loop detected", str(path)),
                )
            yield WalkEntry(path, EntryKind.DIRECTORY, is_symlink, key)
            yield from _walk_dir(path, ancestors | {key}, follow_links)
        elif stat.S_ISREG(st.st_mode):
            yield WalkEntry(path, EntryKind.FILE, is_symlink, key)
        else:
            yield WalkEntry(path, EntryKind.OTHER, is_symlink, key)
