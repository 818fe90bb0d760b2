"""Command line interface for FileSearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from filesearch.config import DEFAULT_ENCODING, ScanConfig
from filesearch.errors import ConfigError, FileSearchError, PatternError
from filesearch.models import FileHandle
from filesearch.scan.scanner import Scanner


console = Console()
error_console = Console(stderr=True)
app = typer.Typer(help="FileSearch - find files by content and zip the matches", add_completion=False)

USAGE = "USAGE: filesearch path [regex] [zipfile]"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _printable(text: str) -> str:
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def _print_match(handle: FileHandle) -> None:
    console.print(_printable(handle.relative_name), markup=False, highlight=False, soft_wrap=True)


def _describe(exc: BaseException) -> str:
    if exc.__cause__ is not None and str(exc.__cause__) not in str(exc):
        return f"{exc} ({exc.__cause__})"
    return str(exc)


@app.command()
def main(
    root: Optional[Path] = typer.Argument(None, help="Directory to scan recursively."),
    pattern: Optional[str] = typer.Argument(
        None, help="Regular expression a whole line must match. Omit to match every file."
    ),
    archive: Optional[Path] = typer.Argument(None, help="Zip file to write matching files into."),
    encoding: str = typer.Option(DEFAULT_ENCODING, help="Text encoding used to read files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search file contents under ROOT and optionally zip the matches."""
    if root is None:
        console.print(USAGE, markup=False, highlight=False, soft_wrap=True)
        return

    _setup_logging(verbose)
    try:
        config = ScanConfig.from_arguments(root, pattern, archive, encoding=encoding)
    except PatternError as exc:
        raise typer.BadParameter(str(exc), param_hint="'PATTERN'") from exc
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    scanner = Scanner(config, on_match=_print_match)
    try:
        stats = scanner.run()
    except FileSearchError as exc:
        error_console.print(
            f"Error: {_printable(_describe(exc))}", markup=False, highlight=False, soft_wrap=True
        )
        raise typer.Exit(code=1) from exc

    console.print(
        f"Scanned: {stats.scanned}, matched: {stats.matched}, failed: {stats.failed}",
        highlight=False,
    )
    if config.archive_path is not None:
        console.print(
            _printable(f"Archived {len(stats.accepted)} files into {config.archive_path}"),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
