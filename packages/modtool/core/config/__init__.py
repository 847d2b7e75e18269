"""Configuration management for modtool."""

from modtool.core.config.loader import detect_format, load_app_config, load_config
from modtool.core.config.mod import (
    ModConfiguration,
    load_embedded_configuration,
    parse_mod_configuration,
    read_mod_configuration,
    serialize_for_archive,
)
from modtool.core.config.models import (
    AppConfig,
    CompressionConfig,
    LoggingConfig,
    PackagingConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    # Mod configuration
    "ModConfiguration",
    "parse_mod_configuration",
    "read_mod_configuration",
    "serialize_for_archive",
    "load_embedded_configuration",
    # App-level config
    "AppConfig",
    "CompressionConfig",
    "LoggingConfig",
    "PackagingConfig",
]
