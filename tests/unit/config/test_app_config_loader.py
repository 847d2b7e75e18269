"""Tests for application config loading."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError
import pytest

from modtool.core.archive import CompressionMethod
from modtool.core.config import AppConfig, detect_format, load_app_config, load_config
from modtool.core.config.loader import LOG_LEVEL_ENV_VAR


@pytest.fixture(autouse=True)
def _clear_log_level_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known_extensions(self, name: str, expected: str) -> None:
        """Extensions are matched case-insensitively."""
        assert detect_format(name) == expected

    def test_unknown_extension(self) -> None:
        """Unknown extensions are rejected."""
        with pytest.raises(ValueError, match="Unsupported config format"):
            detect_format("modtool.toml")


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path) -> None:
        """An empty YAML file loads as {}."""
        path = tmp_path / "modtool.yaml"
        path.write_text("")

        assert load_config(path) == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON raises ValueError."""
        path = tmp_path / "modtool.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML raises ValueError."""
        path = tmp_path / "modtool.yaml"
        path.write_text("packaging: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        """A list at the root is rejected."""
        path = tmp_path / "modtool.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestLoadAppConfig:
    """Tests for load_app_config."""

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults apply when no path is given and no default file exists."""
        monkeypatch.chdir(tmp_path)

        config = load_app_config()

        assert config == AppConfig()
        assert config.packaging.config_file_name == "config.toml"
        assert config.packaging.embedded_config_name == "config.json"
        assert config.packaging.ignore_file_name == ".modignore"
        assert config.compression.method is CompressionMethod.DEFLATED

    def test_default_path_is_picked_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """modtool.yaml in the working directory is loaded automatically."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "modtool.yaml").write_text("compression:\n  method: stored\n")

        assert load_app_config().compression.method is CompressionMethod.STORED

    def test_explicit_json_path(self, tmp_path: Path) -> None:
        """Explicit JSON files are validated into AppConfig."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "packaging": {"ignore_file_name": ".packignore", "follow_links": False},
                    "compression": {"method": "bzip2", "level": 5},
                    "logging": {"level": "DEBUG"},
                }
            )
        )

        config = load_app_config(path)

        assert config.packaging.ignore_file_name == ".packignore"
        assert config.packaging.follow_links is False
        assert config.compression.to_options().method is CompressionMethod.BZIP2
        assert config.compression.to_options().level == 5
        assert config.logging.level == "DEBUG"

    def test_explicit_path_must_exist(self, tmp_path: Path) -> None:
        """A missing explicit path is an error, not a fallback to defaults."""
        with pytest.raises(FileNotFoundError):
            load_app_config(tmp_path / "nope.yaml")

    def test_unknown_top_level_keys_are_ignored(self, tmp_path: Path) -> None:
        """Top-level extras are tolerated."""
        path = tmp_path / "modtool.yaml"
        path.write_text("future_section:\n  x: 1\n")

        assert load_app_config(path) == AppConfig()

    def test_unknown_packaging_keys_are_rejected(self, tmp_path: Path) -> None:
        """Typos inside a section fail validation."""
        path = tmp_path / "modtool.yaml"
        path.write_text("packaging:\n  ignore_fiel_name: x\n")

        with pytest.raises(ValidationError):
            load_app_config(path)

    def test_compression_level_range(self, tmp_path: Path) -> None:
        """Levels outside 0..9 fail validation."""
        path = tmp_path / "modtool.yaml"
        path.write_text("compression:\n  level: 12\n")

        with pytest.raises(ValidationError):
            load_app_config(path)

    def test_env_overrides_log_level(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """MODTOOL_LOG_LEVEL wins over the file and is upper-cased."""
        path = tmp_path / "modtool.yaml"
        path.write_text("logging:\n  level: ERROR\n  structured: true\n")
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "debug")

        config = load_app_config(path)

        assert config.logging.level == "DEBUG"
        assert config.logging.structured is True

    def test_invalid_env_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unknown level in the environment fails validation."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "chatty")

        with pytest.raises(ValidationError):
            load_app_config()
