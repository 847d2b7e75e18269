"""Application configuration models for modtool."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from modtool.core.archive.models import CompressionMethod, CompressionOptions
from modtool.core.utils.logging import DEFAULT_FORMAT


class ConfigBase(BaseModel):
    """Base class for modtool configurations.

    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")


class PackagingConfig(BaseModel):
    """Source tree layout and traversal settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    config_file_name: str = Field(
        default="config.toml",
        min_length=1,
        description="Mod configuration file, relative to the source root",
    )
    embedded_config_name: str = Field(
        default="config.json",
        min_length=1,
        description="Archive entry holding the JSON copy of the configuration",
    )
    ignore_file_name: str = Field(
        default=".modignore",
        min_length=1,
        description="Ignore pattern file, relative to the source root",
    )
    follow_links: bool = Field(default=True, description="Follow symbolic links while walking")
    chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Size of the reusable read buffer in bytes",
    )


class CompressionConfig(BaseModel):
    """Archive compression settings."""

    model_config = ConfigDict(extra="forbid")

    method: CompressionMethod = CompressionMethod.DEFLATED
    level: int | None = Field(default=None, ge=0, le=9)

    def to_options(self) -> CompressionOptions:
        return CompressionOptions(method=self.method, level=self.level)


class LoggingConfig(BaseModel):
    """Log level, format and output style."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default=DEFAULT_FORMAT, description="Text log format")
    structured: bool = Field(default=False, description="Emit JSON log lines")


class AppConfig(ConfigBase):
    """Application-level configuration (shared across packaging runs)."""

    packaging: PackagingConfig = PackagingConfig()
    compression: CompressionConfig = CompressionConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("modtool.yaml")
