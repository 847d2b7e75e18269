"""Loading of the application settings file (JSON or YAML)."""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
import os
from pathlib import Path
from typing import IO, Any

import yaml

from modtool.core.config.models import AppConfig, LoggingConfig

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "MODTOOL_LOG_LEVEL"

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_PARSERS: dict[str, tuple[Callable[[IO[str]], Any], type[Exception]]] = {
    "json": (json.load, json.JSONDecodeError),
    "yaml": (yaml.safe_load, yaml.YAMLError),
}


def detect_format(file_path: Path | str) -> str:
    """Return "json" or "yaml" from the file suffix (case-insensitive).

    Raises:
        ValueError: For any other suffix

    Example:
        >>> detect_format("modtool.YML")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ValueError(f"Unsupported config format: {suffix or '(no suffix)'}") from None


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Read a settings file into a plain mapping.

    An empty YAML document yields an empty mapping.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: On an unsupported suffix, a syntax error, or a root
            that is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    parse, syntax_error = _PARSERS[fmt]
    try:
        with path.open("r", encoding="utf-8") as f:
            content = parse(f)
    except syntax_error as e:
        raise ValueError(f"Invalid {fmt.upper()} in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """
    Load and validate the application settings.

    Resolution order: the explicit path, else ``AppConfig.default_path()``
    when that file exists, else built-in defaults. MODTOOL_LOG_LEVEL then
    overrides ``logging.level``.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file cannot be parsed
        ValidationError: If the settings are invalid
    """
    if path is None and AppConfig.default_path().exists():
        path = AppConfig.default_path()

    if path is None:
        config = AppConfig()
    else:
        config = AppConfig.model_validate(load_config(path))
        logger.debug(f"Loaded app config from {path}")

    return _apply_env_overrides(config)


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    level = os.getenv(LOG_LEVEL_ENV_VAR)
    if not level:
        return config

    logger.debug(f"{LOG_LEVEL_ENV_VAR}={level} overrides the configured log level")
    logging_config = LoggingConfig.model_validate(
        config.logging.model_dump() | {"level": level.upper()}
    )
    return config.model_copy(update={"logging": logging_config})
