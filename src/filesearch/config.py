"""Scan configuration and defaults."""

from __future__ import annotations

import codecs
import os
import re
from dataclasses import dataclass
from pathlib import Path

from filesearch.errors import ConfigError, PatternError

DEFAULT_ENCODING = "utf-8"
DEFAULT_BUFFER_SIZE = 2048


def compile_pattern(raw: str | None) -> re.Pattern[str] | None:
    """Compile a search pattern, or return None when no pattern was given."""
    if raw is None:
        return None
    try:
        return re.compile(raw)
    except re.error as exc:
        raise PatternError(f"Invalid pattern {raw!r}: {exc}") from exc


def _absolute(path: Path, base_dir: Path | None) -> Path:
    # Symlinks stay unresolved; entry names are derived by prefix stripping.
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return Path(os.path.abspath(path))


@dataclass(frozen=True, slots=True)
class ScanConfig:
    root: Path
    pattern: re.Pattern[str] | None = None
    archive_path: Path | None = None
    encoding: str = DEFAULT_ENCODING
    buffer_size: int = DEFAULT_BUFFER_SIZE

    @classmethod
    def from_arguments(
        cls,
        root: Path,
        pattern: str | None = None,
        archive: Path | None = None,
        *,
        encoding: str = DEFAULT_ENCODING,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        base_dir: Path | None = None,
    ) -> ScanConfig:
        """Build a configuration from raw command line values.

        The pattern is compiled here so a bad expression fails before any
        directory is read.
        """
        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise ConfigError(f"Unknown encoding: {encoding}") from exc
        if buffer_size <= 0:
            raise ConfigError(f"Buffer size must be positive, got {buffer_size}")

        return cls(
            root=_absolute(Path(root), base_dir),
            pattern=compile_pattern(pattern),
            archive_path=_absolute(Path(archive), base_dir) if archive is not None else None,
            encoding=encoding,
            buffer_size=buffer_size,
        )

    @property
    def collects_files(self) -> bool:
        return self.archive_path is not None
