"""Full-line pattern matching over file content."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from filesearch.config import DEFAULT_ENCODING
from filesearch.utils.text import iter_lines

LOGGER = logging.getLogger(__name__)


def line_matches(line: str, pattern: re.Pattern[str] | None) -> bool:
    """Return True when the whole line satisfies the pattern.

    A missing pattern accepts everything. Substring hits do not count:
    ``hello`` does not match the line ``hello world``.
    """
    if pattern is None:
        return True
    return pattern.fullmatch(line) is not None


def matches(path: Path, pattern: re.Pattern[str] | None, *, encoding: str = DEFAULT_ENCODING) -> bool:
    """Return True if any line of the file fully matches the pattern.

    Without a pattern the file is not opened at all. Reading stops at the
    first matching line.

    Raises:
        OSError: if the file cannot be opened or read.
        UnicodeDecodeError: if the content is not valid text in ``encoding``.
    """
    if pattern is None:
        return True

    with open(path, "r", encoding=encoding, newline="") as handle:
        for number, line in enumerate(iter_lines(handle), start=1):
            if line_matches(line, pattern):
                LOGGER.debug("Line %d of %s matches", number, path)
                return True
    return False
