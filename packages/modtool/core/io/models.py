"""Models for filesystem traversal."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of a traversed filesystem entry (after following links)."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class WalkEntry:
    """One entry produced by walk_tree()."""

    path: Path
    kind: EntryKind
    is_symlink: bool = False
    file_id: tuple[int, int] | None = None  # (st_dev, st_ino) as walked

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY
