"""Error taxonomy for the packaging pipeline.

Every failure raised while packaging a mod derives from ModFileWriterError.
Each subclass carries the structured context needed to diagnose it and is
raised with its underlying cause chained (``raise ... from cause``).
"""

from __future__ import annotations

from pathlib import Path


class ModFileWriterError(Exception):
    """Base exception for packaging failures.

    All packaging errors are fatal to the current run.
    """

    internal: bool = False


class FileIOError(ModFileWriterError):
    """Raised when a file cannot be opened or read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"io error while reading {self.path}: {cause}")


class ConfigDecodeError(ModFileWriterError):
    """Raised when the mod configuration file cannot be decoded."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"error while parsing the configuration file {self.path}: {cause}")


class WalkError(ModFileWriterError):
    """Raised when the source tree cannot be enumerated."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"error while walking {self.path}: {cause}")


class StripPrefixError(ModFileWriterError):
    """Raised when a traversed entry is not located under the source root."""

    def __init__(self, entry_path: Path, root: Path) -> None:
        self.entry_path = Path(entry_path)
        self.root = Path(root)
        super().__init__(f"error stripping the path {self.entry_path} with {self.root}")


class IgnoreFileError(ModFileWriterError):
    """Raised when the ignore file exists but is unreadable or malformed."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"error while handling the ignore file {self.path}: {cause}")


class ArchiveError(ModFileWriterError):
    """Raised on a zip format violation or an invalid entry name."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        super().__init__(f"error while handling the zip file: {cause}")


class ArchiveWriteError(ArchiveError):
    """Raised when writing to the output sink fails."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        ModFileWriterError.__init__(self, f"error while writing to the zip file: {cause}")


class EncodeError(ModFileWriterError):
    """Raised when a decoded configuration cannot be re-encoded as JSON.

    This signals a logic bug rather than bad user input.
    """

    internal = True

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(
            "can't generate the output json configuration file, but can parse the toml one. "
            f"Probably internal error: {cause}"
        )
