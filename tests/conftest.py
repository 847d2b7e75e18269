"""Shared pytest fixtures for modtool tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import io
import logging
from pathlib import Path
import zipfile

import pytest

from modtool.core.progress import RecordingProgress

# ============================================================================
# Source Tree Fixtures
# ============================================================================

BASIC_CONFIG = """\
identifier = "test_mod"
display_name = "Test Mod"
creator = "tester"
version = "1.0.0"
description = "A mod used in tests"
license = "MIT"
"""


@pytest.fixture
def make_source_tree(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture building a mod source directory.

    Args of the returned callable:
        files: Mapping of relative path -> str/bytes content
        config: config.toml content (None = no config file)
        ignore: .modignore lines (None = no ignore file)
        dirs: Extra (empty) directories to create
        name: Directory name under tmp_path
    """

    def _make(
        files: dict[str, str | bytes] | None = None,
        config: str | None = BASIC_CONFIG,
        ignore: list[str] | None = None,
        dirs: list[str] | None = None,
        name: str = "mod",
    ) -> Path:
        root = tmp_path / name
        root.mkdir()
        if config is not None:
            (root / "config.toml").write_text(config, encoding="utf-8")
        if ignore is not None:
            (root / ".modignore").write_text("\n".join(ignore) + "\n", encoding="utf-8")
        for rel, content in (files or {}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        for rel in dirs or []:
            (root / rel).mkdir(parents=True, exist_ok=True)
        return root

    return _make


@pytest.fixture
def source_tree(make_source_tree: Callable[..., Path]) -> Path:
    """The canonical scenario: data.txt packed, secret.txt ignored."""
    return make_source_tree(
        files={"data.txt": "some data", "secret.txt": "do not ship"},
        ignore=["secret.txt"],
    )


# ============================================================================
# Archive Fixtures
# ============================================================================


@pytest.fixture
def read_archive() -> Callable[[Path | bytes], tuple[dict[str, bytes], str]]:
    """Factory fixture returning ({entry name: content}, comment) of a zip."""

    def _read(source: Path | bytes) -> tuple[dict[str, bytes], str]:
        data = source.read_bytes() if isinstance(source, Path) else source
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert zf.testzip() is None
            entries = {info.filename: zf.read(info) for info in zf.infolist()}
            return entries, zf.comment.decode("utf-8")

    return _read


# ============================================================================
# Progress Fixtures
# ============================================================================


@pytest.fixture
def progress() -> RecordingProgress:
    """Provide a fresh recording progress reporter."""
    return RecordingProgress()


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Undo configure_logging() changes to the root logger after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
