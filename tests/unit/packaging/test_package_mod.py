"""Tests for the package_mod entry point."""

from __future__ import annotations

import os
from pathlib import Path
import zipfile

import pytest

from modtool.core.archive import CompressionMethod
from modtool.core.config import AppConfig, CompressionConfig, PackagingConfig
from modtool.core.errors import ArchiveError, ConfigDecodeError, FileIOError
from modtool.core.packaging import package_mod
from modtool.core.progress import RecordingProgress


class TestPackageMod:
    """Tests for package_mod."""

    def test_writes_archive(self, source_tree: Path, tmp_path: Path, read_archive) -> None:
        """The archive lands at the output path."""
        output = tmp_path / "dist.zip"

        summary = package_mod(source_tree, output)

        entries, comment = read_archive(output)
        assert set(entries) == {".modignore", "data.txt", "config.json"}
        assert comment == "mod id : test_mod\nmod name : Test Mod"
        assert summary.files == 2

    def test_accepts_strings(self, source_tree: Path, tmp_path: Path) -> None:
        """Paths may be given as strings."""
        output = tmp_path / "dist.zip"

        package_mod(str(source_tree), str(output))

        assert output.is_file()

    def test_replaces_existing_output(
        self, source_tree: Path, tmp_path: Path, read_archive
    ) -> None:
        """An existing output file is overwritten."""
        output = tmp_path / "dist.zip"
        output.write_bytes(b"stale")

        package_mod(source_tree, output)

        entries, _ = read_archive(output)
        assert "data.txt" in entries

    def test_failure_leaves_no_output(self, make_source_tree, tmp_path: Path) -> None:
        """A failed run leaves neither the output nor a temp file."""
        source = make_source_tree(config=None)
        output = tmp_path / "dist.zip"

        with pytest.raises(FileIOError):
            package_mod(source, output)

        assert not output.exists()
        assert list(tmp_path.glob(".dist.zip.*")) == []

    def test_failure_keeps_previous_output(self, make_source_tree, tmp_path: Path) -> None:
        """A failed run does not clobber the last good archive."""
        source = make_source_tree(config='identifier = ""\n')
        output = tmp_path / "dist.zip"
        output.write_bytes(b"previous")

        with pytest.raises(ConfigDecodeError):
            package_mod(source, output, strict=True)

        assert output.read_bytes() == b"previous"

    def test_oversized_comment_fails(self, make_source_tree, tmp_path: Path) -> None:
        """A display name too long for the archive comment fails the run."""
        source = make_source_tree(
            config=f'identifier = "big"\ndisplay_name = "{"n" * 70000}"\n'
        )
        output = tmp_path / "dist.zip"

        with pytest.raises(ArchiveError):
            package_mod(source, output)

        assert not output.exists()

    def test_output_inside_source_is_not_packed(self, source_tree: Path, read_archive) -> None:
        """The output and its temp file are excluded from the walk."""
        output = source_tree / "dist.zip"
        output.write_bytes(b"previous build")

        package_mod(source_tree, output)

        entries, _ = read_archive(output)
        assert "dist.zip" not in entries
        assert not any(name.endswith(".tmp") for name in entries)
        assert not any(p.name.endswith(".tmp") for p in source_tree.iterdir())

    def test_output_excluded_through_dotdot_source(
        self, source_tree: Path, read_archive, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Exclusion holds when the source path is spelled with ``..``."""
        monkeypatch.chdir(source_tree)
        Path("dist.zip").write_bytes(b"previous build")

        package_mod(Path("..") / source_tree.name, "dist.zip")

        entries, _ = read_archive(source_tree / "dist.zip")
        assert set(entries) == {".modignore", "data.txt", "config.json"}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_output_excluded_through_linked_source(
        self, source_tree: Path, tmp_path: Path, read_archive
    ) -> None:
        """Exclusion holds when the source is reached through a symlink."""
        link = tmp_path / "linked_mod"
        link.symlink_to(source_tree, target_is_directory=True)
        output = source_tree / "dist.zip"
        output.write_bytes(b"previous build")

        package_mod(link, output)

        entries, _ = read_archive(output)
        assert "dist.zip" not in entries
        assert not any(name.endswith(".tmp") for name in entries)

    def test_app_config_applies(self, source_tree: Path, tmp_path: Path) -> None:
        """Settings from AppConfig reach the writer."""
        app_config = AppConfig(
            packaging=PackagingConfig(embedded_config_name="meta.json"),
            compression=CompressionConfig(method=CompressionMethod.STORED),
        )
        output = tmp_path / "dist.zip"

        summary = package_mod(source_tree, output, app_config=app_config)

        with zipfile.ZipFile(output) as zf:
            assert "meta.json" in zf.namelist()
            assert zf.getinfo("data.txt").compress_type == zipfile.ZIP_STORED
        assert summary.embedded_config == "meta.json"

    def test_progress_forwarded(
        self, source_tree: Path, tmp_path: Path, progress: RecordingProgress
    ) -> None:
        """The reporter receives every step."""
        package_mod(source_tree, tmp_path / "dist.zip", progress=progress)

        assert [step for step, _, _ in progress.events] == [1, 2, 3, 4, 5]
