"""High-level packaging entry points."""

from __future__ import annotations

import logging
from pathlib import Path

from modtool.core.config.models import AppConfig
from modtool.core.io import atomic_output
from modtool.core.packaging.models import PackagingSummary
from modtool.core.packaging.writer import ModFileWriter
from modtool.core.progress import ProgressReporter

logger = logging.getLogger(__name__)


def package_mod(
    source_dir: Path | str,
    output_file: Path | str,
    *,
    app_config: AppConfig | None = None,
    progress: ProgressReporter | None = None,
    strict: bool = False,
) -> PackagingSummary:
    """Package source_dir into the zip file output_file.

    The archive is written to a temporary file beside output_file and moved
    into place only on success; a failed run leaves no output file behind.
    The output and its temporary file are never packed, even when they live
    inside source_dir.

    Args:
        source_dir: Root of the mod source tree
        output_file: Archive to create (replaced if it exists)
        app_config: Application settings (defaults if None)
        progress: Receiver of step messages
        strict: Fail when identifier or display_name is empty

    Returns:
        Summary of the packed entries

    Raises:
        ModFileWriterError: On any packaging failure
    """
    app_config = app_config or AppConfig()
    output_file = Path(output_file)

    with atomic_output(output_file) as sink:
        writer = ModFileWriter(
            source_dir,
            settings=app_config.packaging,
            compression=app_config.compression.to_options(),
            progress=progress,
            strict=strict,
            exclude=[output_file, Path(sink.name)],
        )
        summary = writer.write(sink)

    logger.info(f"wrote {output_file}")
    return summary
