"""Ignore-file resolution with gitignore semantics.

Patterns come from one file under the source root (``.modignore`` by
default) and are compiled with ``pathspec.GitIgnoreSpec``.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path, PurePath, PurePosixPath
import re

import pathspec

from modtool.core.errors import IgnoreFileError

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".modignore"


class IgnoreSet:
    """
    Compiled ignore patterns for one packaging run.

    Matching follows gitignore rules: the path itself is checked first, then
    each parent directory from the nearest upwards; the first decisive match
    (ignore, or re-include through ``!``) wins. A matched parent directory
    therefore excludes everything beneath it.

    Example:
        >>> ignore = IgnoreSet.from_lines(["*.log", "build/", "!keep.log"])
        >>> ignore.is_ignored("debug.log", is_directory=False)
        True
        >>> ignore.is_ignored("keep.log", is_directory=False)
        False
        >>> ignore.is_ignored("build/out/mod.bin", is_directory=False)
        True
    """

    def __init__(
        self,
        spec: pathspec.GitIgnoreSpec,
        source: Path | None = None,
        lines: Iterable[str] = (),
    ) -> None:
        self._spec = spec
        self.source = source
        self._lines = [line for line in lines if line.strip() and not line.startswith("#")]

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Path | None = None) -> IgnoreSet:
        """
        Compile pattern lines.

        Raises:
            IgnoreFileError: If a pattern is malformed
        """
        lines = list(lines)
        try:
            spec = pathspec.GitIgnoreSpec.from_lines(lines)
        except (ValueError, re.error) as e:
            # pathspec reports bad patterns as ValueError, bad ranges as re.error
            raise IgnoreFileError(source or Path(DEFAULT_IGNORE_FILE), e) from e
        return cls(spec, source, lines)

    @property
    def patterns(self) -> list[str]:
        """Source lines of the effective (non-comment, non-blank) patterns."""
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def is_ignored(self, relative_path: PurePath | str, is_directory: bool) -> bool:
        """
        Check a root-relative path against the patterns and its parents.

        Args:
            relative_path: Path relative to the source root
            is_directory: Whether the path is a directory (enables ``dir/`` patterns)
        """
        path = PurePosixPath(PurePath(relative_path).as_posix())
        if path.as_posix() in ("", "."):
            return False

        decision = self._check(path, is_directory)
        if decision is not None:
            return decision

        for parent in path.parents:
            if parent.as_posix() == ".":
                break
            decision = self._check(parent, True)
            if decision is not None:
                return decision
        return False

    def _check(self, path: PurePosixPath, is_directory: bool) -> bool | None:
        candidate = f"{path.as_posix()}/" if is_directory else path.as_posix()
        return self._spec.check_file(candidate).include


def build_ignore_set(
    source_root: Path | str, ignore_file_relative_path: str = DEFAULT_IGNORE_FILE
) -> IgnoreSet | None:
    """
    Load the ignore file under source_root.

    A missing file is not an error: None is returned ("ignore nothing") and
    an informational notice is logged.

    Args:
        source_root: Root of the mod source tree
        ignore_file_relative_path: Ignore file location relative to the root

    Returns:
        Compiled IgnoreSet, or None when the file does not exist

    Raises:
        IgnoreFileError: If the file exists but cannot be read, is not UTF-8,
            or contains a malformed pattern
    """
    ignore_path = Path(source_root) / ignore_file_relative_path
    try:
        text = ignore_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info(f"{ignore_path} not found, ignoring it.")
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileError(ignore_path, e) from e

    ignore = IgnoreSet.from_lines(text.splitlines(), source=ignore_path)
    logger.debug(f"Loaded {len(ignore)} ignore patterns from {ignore_path}")
    return ignore
