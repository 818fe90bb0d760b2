"""Zip archive construction for accepted files."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Sequence

from filesearch.config import DEFAULT_BUFFER_SIZE
from filesearch.errors import ArchiveError
from filesearch.models import FileHandle
from filesearch.utils.files import entry_name

LOGGER = logging.getLogger(__name__)


def archive_files(
    root: Path,
    files: Sequence[FileHandle],
    target: Path,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Write ``files`` into a new zip archive at ``target``.

    Entries are named relative to ``root`` and written in list order, each
    stamped with its source file's modification time. File content is
    streamed through a ``buffer_size`` buffer.

    The archive is always closed, but a failure part way through leaves the
    partially written file on disk.

    Raises:
        ArchiveError: if an entry name is unsafe or duplicated, the target
            cannot be written, or a source file cannot be read.
    """
    entries = [(handle.path, entry_name(handle.path, root)) for handle in files]
    _assert_no_duplicate_entries([name for _, name in entries])

    LOGGER.info("Writing %d entries to %s", len(entries), target)
    try:
        with zipfile.ZipFile(target, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path, name in entries:
                _write_entry(zf, path, name, buffer_size=buffer_size)
    except OSError as exc:
        raise ArchiveError(f"Failed to write zip archive: {target}: {exc}") from exc
    LOGGER.info("Archive complete: %s", target)


def _write_entry(zf: zipfile.ZipFile, path: Path, name: str, *, buffer_size: int) -> None:
    try:
        info = zipfile.ZipInfo.from_file(path, arcname=name, strict_timestamps=False)
        info.compress_type = zipfile.ZIP_DEFLATED
        with open(path, "rb") as source, zf.open(
            info, mode="w", force_zip64=info.file_size > zipfile.ZIP64_LIMIT
        ) as dest:
            shutil.copyfileobj(source, dest, buffer_size)
    except (OSError, ValueError) as exc:
        raise ArchiveError(f"Failed to archive file: {path}: {exc}") from exc
    LOGGER.debug("Archived %s as %s", path, name)


def _assert_no_duplicate_entries(entry_names: list[str]) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for name in entry_names:
        if name in seen:
            duplicates.add(name)
        seen.add(name)

    if duplicates:
        ordered = ", ".join(sorted(duplicates))
        raise ArchiveError(f"Duplicate zip entry paths detected: {ordered}")
