"""Mod configuration record and its two textual formats.

The human-editable source is TOML (``config.toml``); the copy embedded in the
archive is pretty-printed JSON (``config.json``).
"""

from __future__ import annotations

import logging
from pathlib import Path
import tomllib

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticSerializationError

from modtool.core.errors import ConfigDecodeError, EncodeError, FileIOError

logger = logging.getLogger(__name__)

JSON_INDENT = 2


class ModConfiguration(BaseModel):
    """Mod metadata parsed from ``config.toml``.

    Immutable after creation. Unknown keys are ignored for forward
    compatibility; missing keys take empty defaults.

    Example:
        >>> config = parse_mod_configuration(b'identifier = "test_mod"')
        >>> config.identifier
        'test_mod'
        >>> config.tags
        []
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    creator: str = Field(default="", description="Author or team publishing the mod")
    identifier: str = Field(
        default="",
        validation_alias=AliasChoices("identifier", "id"),
        description="Unique mod id, used as the archive id",
    )
    version: str = Field(default="", description="Mod version string")
    display_name: str = Field(default="", description="Human-readable mod name")
    description: str = Field(default="", description="Long description")
    license: str = Field(default="", description="License identifier or text")
    website_url: str | None = Field(default=None, description="Project homepage")
    dependencies: list[str] = Field(
        default_factory=list, description="Identifiers of required mods, in order"
    )
    tags: list[str] = Field(default_factory=list, description="Free-form tags, in order")
    install_strategies: list[dict[str, str]] = Field(
        default_factory=list, description="Ordered install strategy mappings"
    )
    extra_data: dict[str, str] = Field(
        default_factory=dict, description="Forward-compatible key/value metadata"
    )

    def missing_required_fields(self) -> list[str]:
        """Names of fields a well-formed package must not leave empty."""
        return [name for name in ("identifier", "display_name") if not getattr(self, name)]

    @property
    def archive_comment(self) -> str:
        """Comment stored in the packaged archive."""
        return f"mod id : {self.identifier}\nmod name : {self.display_name}"


def parse_mod_configuration(data: bytes, path: Path | str = "config.toml") -> ModConfiguration:
    """
    Decode a TOML mod configuration.

    Args:
        data: Raw file content (UTF-8)
        path: Source path, reported in errors

    Returns:
        Parsed configuration

    Raises:
        ConfigDecodeError: On invalid UTF-8, TOML syntax, or field types
    """
    try:
        raw = tomllib.loads(data.decode("utf-8"))
        return ModConfiguration.model_validate(raw)
    except (UnicodeDecodeError, tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigDecodeError(Path(path), e) from e


def read_mod_configuration(path: Path | str) -> ModConfiguration:
    """
    Read and decode the mod configuration file at path.

    The file handle is closed before decoding.

    Raises:
        FileIOError: If the file cannot be opened or read
        ConfigDecodeError: If the content cannot be decoded
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileIOError(path, e) from e
    config = parse_mod_configuration(data, path)
    logger.debug(f"Read mod configuration {config.identifier!r} from {path}")
    return config


def serialize_for_archive(config: ModConfiguration) -> bytes:
    """
    Encode the configuration as pretty-printed JSON for embedding.

    Raises:
        EncodeError: If encoding fails (internal error)
    """
    try:
        return config.model_dump_json(indent=JSON_INDENT).encode("utf-8")
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise EncodeError(e) from e


def load_embedded_configuration(data: bytes) -> ModConfiguration:
    """
    Decode a configuration previously produced by serialize_for_archive().

    Raises:
        ValidationError: If the JSON does not describe a configuration
    """
    return ModConfiguration.model_validate_json(data)
