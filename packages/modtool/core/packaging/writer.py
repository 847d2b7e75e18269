"""Packaging orchestrator.

Turns a mod source directory into a zip archive in five reported steps:

1. read ``config.toml``
2. read the ignore list (``.modignore``)
3. create the archive and set its comment
4. add every non-ignored entry of the source tree
5. embed the configuration as ``config.json``

Every failure aborts the run with a ModFileWriterError subclass; the output
written so far must then be discarded by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
import os
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from modtool.core.archive import ArchiveWriter, CompressionOptions, to_archive_name
from modtool.core.config.mod import (
    ModConfiguration,
    read_mod_configuration,
    serialize_for_archive,
)
from modtool.core.config.models import PackagingConfig
from modtool.core.errors import ConfigDecodeError, FileIOError, StripPrefixError
from modtool.core.ignore import IgnoreSet, build_ignore_set
from modtool.core.io import EntryKind, WalkEntry, walk_tree
from modtool.core.packaging.models import (
    EntryAction,
    PackagingSummary,
    PlannedEntry,
)
from modtool.core.progress import ProgressReporter, StepProgress
from modtool.core.utils.logging import log_duration

logger = logging.getLogger(__name__)

STEP_COUNT = 5


class ModFileWriter:
    """
    Packages one mod source directory into a zip archive.

    A writer holds only its settings; each write() or plan() call builds a
    fresh configuration, ignore set, and buffer, and drops them at the end.

    Example:
        >>> writer = ModFileWriter(Path("my_mod"), progress=ConsoleProgress())
        >>> with open("my_mod.zip", "wb") as sink:
        ...     summary = writer.write(sink)
        >>> summary.files
        12
    """

    def __init__(
        self,
        source_dir: Path | str,
        *,
        settings: PackagingConfig | None = None,
        compression: CompressionOptions | None = None,
        progress: ProgressReporter | None = None,
        strict: bool = False,
        exclude: Iterable[Path | str] = (),
    ) -> None:
        """
        Initialize the writer.

        Args:
            source_dir: Root of the mod source tree
            settings: File names and traversal settings
            compression: Archive compression options
            progress: Receiver of step messages (silent if None)
            strict: Fail when identifier or display_name is empty
            exclude: Files never packed (e.g. the output file), matched by
                identity so any spelling of the path works
        """
        self.source_dir = Path(source_dir).absolute()
        self.settings = settings or PackagingConfig()
        self.compression = compression or CompressionOptions()
        self.progress = progress
        self.strict = strict
        self.exclude = tuple(Path(p) for p in exclude)

    @property
    def config_path(self) -> Path:
        return self.source_dir / self.settings.config_file_name

    @log_duration
    def write(self, destination: BinaryIO) -> PackagingSummary:
        """
        Package the source directory into destination.

        The archive is finished (central directory written) before returning;
        destination itself is left open.

        Args:
            destination: Writable binary sink, ideally seekable

        Returns:
            Summary of the packed entries

        Raises:
            ModFileWriterError: Any failure; destination content is unusable
        """
        progress = StepProgress(STEP_COUNT, self.progress)

        progress.advance(f"reading the {str(self.config_path)!r} configuration file")
        config = self._read_config()

        progress.advance("reading the ignore list")
        ignore = build_ignore_set(self.source_dir, self.settings.ignore_file_name)

        progress.advance("creating the zip file")
        archive = ArchiveWriter(destination, self.compression)
        archive.set_comment(config.archive_comment)

        summary = PackagingSummary(
            identifier=config.identifier,
            display_name=config.display_name,
            embedded_config=self.settings.embedded_config_name,
        )

        progress.advance("adding the source tree")
        buffer = bytearray(self.settings.chunk_size)
        for entry in self._iter_entries(ignore):
            if entry.action is EntryAction.FILE:
                logger.info(f"adding the file {entry.relative_path} to the archive")
                archive.start_file(entry.archive_name)
                summary.bytes_packed += self._copy_file(entry.source_path, archive, buffer)
                summary.files += 1
            elif entry.action is EntryAction.DIRECTORY:
                logger.info(f"adding the directory {entry.relative_path} to the archive")
                archive.add_directory(entry.archive_name)
                summary.directories += 1
            elif entry.action is EntryAction.IGNORED:
                summary.ignored += 1

        progress.advance(f"adding the {self.settings.embedded_config_name} configuration file")
        embedded = serialize_for_archive(config)
        archive.start_file(self.settings.embedded_config_name)
        archive.write_all(embedded)
        archive.finish()

        logger.info(
            f"finished packaging {config.identifier!r}: {summary.files} files, "
            f"{summary.directories} directories, {summary.ignored} ignored"
        )
        return summary

    def plan(self) -> list[PlannedEntry]:
        """
        Resolve what write() would do, without writing anything.

        Reads the configuration and ignore file and walks the tree.

        Returns:
            One PlannedEntry per traversed entry, in traversal order

        Raises:
            ModFileWriterError: Same read-side failures as write()
        """
        self._read_config()
        ignore = build_ignore_set(self.source_dir, self.settings.ignore_file_name)
        return list(self._iter_entries(ignore))

    def _read_config(self) -> ModConfiguration:
        config = read_mod_configuration(self.config_path)
        missing = config.missing_required_fields()
        if missing:
            if self.strict:
                raise ConfigDecodeError(
                    self.config_path,
                    ValueError(f"required fields are empty: {', '.join(missing)}"),
                )
            logger.warning(f"{self.config_path}: required fields are empty: {', '.join(missing)}")
        return config

    def _iter_entries(self, ignore: IgnoreSet | None) -> Iterator[PlannedEntry]:
        """Classify every walker entry, lazily."""
        config_relative = PurePosixPath(self.settings.config_file_name)
        excluded = _file_ids(self.exclude)
        for entry in walk_tree(self.source_dir, follow_links=self.settings.follow_links):
            relative = self._relative(entry)
            yield self._classify(entry, relative, ignore, config_relative, excluded)

    def _classify(
        self,
        entry: WalkEntry,
        relative: PurePosixPath,
        ignore: IgnoreSet | None,
        config_relative: PurePosixPath,
        excluded: frozenset[tuple[int, int]],
    ) -> PlannedEntry:
        def planned(action: EntryAction, archive_name: str | None = None) -> PlannedEntry:
            return PlannedEntry(
                source_path=entry.path,
                relative_path=relative,
                action=action,
                archive_name=archive_name,
            )

        if entry.file_id is not None and entry.file_id in excluded:
            logger.debug(f"excluded {relative}")
            return planned(EntryAction.EXCLUDED)

        if ignore is not None and ignore.is_ignored(relative, not entry.is_file):
            logger.info(f"ignored {relative}")
            return planned(EntryAction.IGNORED)

        if entry.is_file and relative == config_relative:
            return planned(EntryAction.CONFIG_SOURCE)

        if entry.kind is EntryKind.FILE:
            return planned(EntryAction.FILE, to_archive_name(relative))
        if entry.kind is EntryKind.DIRECTORY:
            return planned(EntryAction.DIRECTORY, to_archive_name(relative, is_directory=True))

        logger.warning(f"skipping {relative}: not a regular file or directory")
        return planned(EntryAction.UNSUPPORTED)

    def _relative(self, entry: WalkEntry) -> PurePosixPath:
        try:
            return PurePosixPath(entry.path.relative_to(self.source_dir).as_posix())
        except ValueError as e:
            raise StripPrefixError(entry.path, self.source_dir) from e

    @staticmethod
    def _copy_file(path: Path, archive: ArchiveWriter, buffer: bytearray) -> int:
        """Stream one file into the open archive entry through buffer."""
        view = memoryview(buffer)
        copied = 0
        try:
            with path.open("rb") as f:
                while True:
                    try:
                        n = f.readinto(buffer)
                    except OSError as e:
                        raise FileIOError(path, e) from e
                    if not n:
                        break
                    archive.write_all(view[:n])
                    copied += n
        except OSError as e:
            # open() or close() failures
            raise FileIOError(path, e) from e
        finally:
            view.release()
        return copied


def _file_ids(paths: Iterable[Path]) -> frozenset[tuple[int, int]]:
    """(st_dev, st_ino) of the paths that currently exist."""
    ids = set()
    for path in paths:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            # not created yet, so the walk cannot meet it
            continue
        except OSError as e:
            raise FileIOError(path, e) from e
        ids.add((st.st_dev, st.st_ino))
    return frozenset(ids)
