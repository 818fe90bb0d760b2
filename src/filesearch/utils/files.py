"""Utility helpers for walking directories and naming archive entries."""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Iterator

from filesearch.errors import ArchiveError, WalkError
from filesearch.models import FileHandle

LOGGER = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")


def iter_files(root: Path) -> Iterator[FileHandle]:
    """Yield every regular file under ``root``, depth-first and pre-order.

    Subdirectories are entered whether or not they are symbolic links. A
    directory already present on the current ancestor chain is not entered
    again, which stops symlink cycles. Sibling order is whatever the
    filesystem reports.

    Raises:
        WalkError: if ``root`` is not a directory or any directory under it
            cannot be listed.
    """
    root_abs = Path(os.path.abspath(root))
    if not root_abs.is_dir():
        raise WalkError(f"Scan root is not a directory: {root_abs}")
    yield from _walk_dir(root_abs, root_abs, ancestors=frozenset())


def _walk_dir(
    current: Path, root: Path, *, ancestors: frozenset[tuple[int, int]]
) -> Iterator[FileHandle]:
    try:
        stat = current.stat()
        with os.scandir(current) as scan:
            entries = list(scan)
    except OSError as exc:
        raise WalkError(f"Failed to read directory: {current}") from exc

    ancestors = ancestors | {(stat.st_dev, stat.st_ino)}

    for entry in entries:
        child = Path(entry.path)
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            raise WalkError(f"Failed to read directory entry: {child}") from exc

        if is_dir:
            if _identity(child) in ancestors:
                LOGGER.warning("Skipping directory cycle at %s", child)
                continue
            yield from _walk_dir(child, root, ancestors=ancestors)
        elif is_file:
            yield FileHandle(path=child, root=root)
        else:
            LOGGER.debug("Skipping non-regular entry %s", child)


def _identity(path: Path) -> tuple[int, int]:
    try:
        stat = path.stat()
    except OSError as exc:
        raise WalkError(f"Failed to read directory: {path}") from exc
    return stat.st_dev, stat.st_ino


def entry_name(path: Path | str, root: Path | str) -> str:
    """Map ``path`` to an archive entry name relative to ``root``.

    The root's absolute prefix is stripped from the file's absolute path,
    backslashes become forward slashes and leading slashes are removed, so
    ``/a/b/c\\d.txt`` under ``/a/b`` becomes ``c/d.txt``. Name bytes that are
    not valid UTF-8 are replaced with U+FFFD.

    Raises:
        ArchiveError: if the path does not lie strictly under the root or the
            resulting name is not a safe relative path.
    """
    root_abs = os.path.abspath(root)
    path_abs = os.path.abspath(path)

    if not path_abs.startswith(root_abs):
        raise ArchiveError(f"Path is outside the scan root {root_abs}: {path_abs}")
    remainder = path_abs[len(root_abs) :]
    if not root_abs.endswith(_SEPARATORS) and not remainder.startswith(_SEPARATORS):
        raise ArchiveError(f"Path is outside the scan root {root_abs}: {path_abs}")

    name = remainder.replace("\\", "/").lstrip("/")
    # Undecodable bytes in file names become U+FFFD; zip names must be UTF-8.
    name = os.fsencode(name).decode("utf-8", "replace")
    if not name:
        raise ArchiveError(f"Path does not name a file under the scan root: {path_abs}")
    if ".." in PurePosixPath(name).parts:
        raise ArchiveError(f"Unsafe archive entry name: {name}")
    return name
