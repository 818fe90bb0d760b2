"""Text helpers for line-oriented reading."""

from __future__ import annotations

from typing import Iterable, Iterator


def iter_lines(stream: Iterable[str]) -> Iterator[str]:
    """Yield lines from a text stream without their line terminators.

    Works lazily so callers can stop reading at the first interesting line.
    """
    for line in stream:
        if line.endswith("\r\n"):
            yield line[:-2]
        elif line.endswith(("\n", "\r")):
            yield line[:-1]
        else:
            yield line
