"""Scan pipeline: walk, match, collect, archive."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable

from filesearch.archive.writer import archive_files
from filesearch.config import ScanConfig
from filesearch.models import FileHandle
from filesearch.search.matcher import matches
from filesearch.utils.files import iter_files

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanStats:
    scanned: int = 0
    matched: int = 0
    failed: int = 0
    skipped: int = 0
    accepted: list[FileHandle] = field(default_factory=list)


class Scanner:
    """Coordinates the directory walk, content matching and archiving."""

    def __init__(
        self,
        config: ScanConfig,
        *,
        on_match: Callable[[FileHandle], None] | None = None,
    ) -> None:
        self.config = config
        self.on_match = on_match

    def scan(self) -> ScanStats:
        """Walk the root and match every file.

        A file that cannot be read or decoded is logged and counted as
        failed; the walk carries on. Errors listing a directory propagate.
        """
        stats = ScanStats()
        target_identity = self._archive_identity()
        for handle in iter_files(self.config.root):
            if self._is_archive_target(handle, target_identity):
                LOGGER.debug("Skipping archive target %s", handle.path)
                stats.skipped += 1
                continue
            stats.scanned += 1
            self._process_file(handle, stats)
        return stats

    def run(self) -> ScanStats:
        """Scan, then write the accepted files when an archive target is set."""
        stats = self.scan()
        if self.config.archive_path is not None:
            archive_files(
                self.config.root,
                stats.accepted,
                self.config.archive_path,
                buffer_size=self.config.buffer_size,
            )
        return stats

    def _process_file(self, handle: FileHandle, stats: ScanStats) -> None:
        try:
            found = matches(handle.path, self.config.pattern, encoding=self.config.encoding)
        except (OSError, ValueError) as exc:
            LOGGER.error("Failed to process %s: %s", handle.path, exc)
            stats.failed += 1
            return

        if not found:
            return

        stats.matched += 1
        LOGGER.debug("Matched: %s", handle.path)
        if self.config.collects_files:
            stats.accepted.append(handle)
        if self.on_match is not None:
            try:
                self.on_match(handle)
            except (OSError, ValueError) as exc:
                LOGGER.error("Failed to report match %s: %s", handle.path, exc)

    def _archive_identity(self) -> tuple[int, int] | None:
        if self.config.archive_path is None:
            return None
        try:
            stat = self.config.archive_path.stat()
        except OSError:
            return None
        return stat.st_dev, stat.st_ino

    def _is_archive_target(self, handle: FileHandle, identity: tuple[int, int] | None) -> bool:
        if handle.path == self.config.archive_path:
            return True
        if identity is None:
            return False
        try:
            stat = os.stat(handle.path)
        except OSError:
            return False
        return (stat.st_dev, stat.st_ino) == identity
