"""Core FileSearch data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileHandle:
    """A regular file found under the scan root."""

    path: Path
    root: Path

    @property
    def relative_name(self) -> str:
        """Archive entry name: relative to the root, forward slashes, no leading slash."""
        from filesearch.utils.files import entry_name

        return entry_name(self.path, self.root)
