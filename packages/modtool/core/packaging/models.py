"""Models describing a packaging run and its outcome."""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict, Field


class EntryAction(str, Enum):
    """What the packager does with one traversed entry."""

    FILE = "file"  # packed with its content
    DIRECTORY = "directory"  # packed as an empty directory entry
    IGNORED = "ignored"  # matched by the ignore file
    CONFIG_SOURCE = "config_source"  # replaced by the embedded JSON copy
    EXCLUDED = "excluded"  # the run's own output
    UNSUPPORTED = "unsupported"  # socket, FIFO, device

    @property
    def is_packed(self) -> bool:
        return self in (EntryAction.FILE, EntryAction.DIRECTORY)


class PlannedEntry(BaseModel):
    """Decision taken for one traversed filesystem entry."""

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(description="Absolute path of the entry")
    relative_path: PurePosixPath = Field(description="Path relative to the source root")
    action: EntryAction
    archive_name: str | None = Field(
        default=None, description="Zip entry name, for packed entries only"
    )


class PackagingSummary(BaseModel):
    """Outcome of a successful packaging run."""

    identifier: str
    display_name: str
    files: int = Field(default=0, ge=0, description="File entries written")
    directories: int = Field(default=0, ge=0, description="Directory entries written")
    ignored: int = Field(default=0, ge=0, description="Entries skipped by ignore rules")
    bytes_packed: int = Field(default=0, ge=0, description="Uncompressed source bytes")
    embedded_config: str = Field(default="config.json")
