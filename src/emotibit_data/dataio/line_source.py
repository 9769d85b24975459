"""File-backed line source for raw EmotiBit recordings."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator


def iter_file_lines(path: str | Path, *, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield the lines of ``path`` one at a time with line terminators removed.

    The file stays open only while the iterator is being consumed.
    """
    with Path(path).open("r", encoding=encoding, newline="") as fh:
        for line in fh:
            yield line.rstrip("\r\n")
