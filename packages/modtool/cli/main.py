"""Command-line interface for modtool."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from modtool.core.config import AppConfig, load_app_config
from modtool.core.errors import ModFileWriterError
from modtool.core.packaging import ModFileWriter, package_mod
from modtool.core.progress import ConsoleProgress, NullProgress
from modtool.core.utils.logging import configure_logging

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERNAL = 70  # EX_SOFTWARE


def _load_settings(args: argparse.Namespace) -> AppConfig | None:
    """Load app config and configure logging; None after reporting a failure."""
    try:
        app_config = load_app_config(args.app_config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        err_console.print(Text(f"ERROR: Could not load config: {e}", style="red"))
        return None

    level = args.log_level or app_config.logging.level
    if args.quiet and not args.log_level:
        level = "WARNING"
    configure_logging(
        level=level,
        format_string=app_config.logging.format,
        structured=app_config.logging.structured,
    )
    return app_config


def _report_error(error: ModFileWriterError) -> int:
    message = Text(f"error: {error}", style="bold red")
    cause = error.__cause__
    if cause is not None and str(cause) not in str(error):
        message.append(f"\n  caused by: {cause}", style="red")
    err_console.print(message)
    if error.internal:
        err_console.print(Text("This is an internal error, please report it.", style="red"))
        return EXIT_INTERNAL
    return EXIT_FAILURE


def run_package(args: argparse.Namespace) -> int:
    """Run the package subcommand."""
    app_config = _load_settings(args)
    if app_config is None:
        return EXIT_FAILURE

    source_dir = Path(args.source_dir)
    output_file = Path(args.output_file)

    try:
        if args.dry_run:
            return _print_plan(source_dir, output_file, app_config, strict=args.strict)

        progress = NullProgress() if args.quiet else ConsoleProgress(console)
        summary = package_mod(
            source_dir,
            output_file,
            app_config=app_config,
            progress=progress,
            strict=args.strict,
        )
    except ModFileWriterError as e:
        logger.debug("packaging failed", exc_info=True)
        return _report_error(e)

    if not args.quiet:
        console.print(
            Text.assemble(
                ("✅ ", "green"),
                f"{summary.identifier} packaged into {output_file} ",
                (f"({summary.files} files, {summary.directories} directories)", "dim"),
            )
        )
    return EXIT_OK


def _print_plan(source_dir: Path, output_file: Path, app_config: AppConfig, strict: bool) -> int:
    writer = ModFileWriter(
        source_dir,
        settings=app_config.packaging,
        strict=strict,
        exclude=[output_file],
    )
    for entry in writer.plan():
        name = entry.archive_name or entry.relative_path.as_posix()
        style = "green" if entry.action.is_packed else "dim"
        console.print(Text.assemble((f"{entry.action.value:<13}", style), " ", name))
    console.print(
        Text.assemble((f"{'embedded':<13}", "green"), " ", app_config.packaging.embedded_config_name)
    )
    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="modtool",
        description="modtool - package mods into redistributable zip files",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    package = sub.add_parser("package", help="Package a mod into a redistributable zip file")
    package.add_argument(
        "--source-dir",
        default=os.curdir,
        help="The source directory that contains the mod source (default: current dir)",
    )
    package.add_argument(
        "--output-file",
        required=True,
        help="Path to the zip file that will be created",
    )
    package.add_argument(
        "--app-config",
        default=None,
        help=f"Path to app config JSON/YAML (default: {AppConfig.default_path()} if present)",
    )
    package.add_argument(
        "--strict",
        action="store_true",
        help="Fail when identifier or display_name is empty",
    )
    package.add_argument(
        "--dry-run",
        action="store_true",
        help="List what would be packed without writing the archive",
    )
    package.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )
    package.add_argument(
        "--quiet",
        action="store_true",
        help="Hide progress output and informational logs",
    )

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "package":
        return run_package(args)

    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
