"""Models for archive compression settings."""

from __future__ import annotations

from enum import Enum
import zipfile

from pydantic import BaseModel, ConfigDict, Field


class CompressionMethod(str, Enum):
    """Compression methods supported for archive entries."""

    STORED = "stored"
    DEFLATED = "deflated"
    BZIP2 = "bzip2"
    LZMA = "lzma"

    @property
    def zip_constant(self) -> int:
        """The matching ``zipfile`` compression constant."""
        return _ZIP_CONSTANTS[self]


_ZIP_CONSTANTS = {
    CompressionMethod.STORED: zipfile.ZIP_STORED,
    CompressionMethod.DEFLATED: zipfile.ZIP_DEFLATED,
    CompressionMethod.BZIP2: zipfile.ZIP_BZIP2,
    CompressionMethod.LZMA: zipfile.ZIP_LZMA,
}


class CompressionOptions(BaseModel):
    """Compression applied to archive entries.

    The level is archive-wide; only the method can be overridden per entry.
    """

    method: CompressionMethod = Field(
        default=CompressionMethod.DEFLATED, description="Entry compression method"
    )
    level: int | None = Field(
        default=None,
        ge=0,
        le=9,
        description="Compression level (None = codec default, ignored for stored/lzma)",
    )

    model_config = ConfigDict(frozen=True)
