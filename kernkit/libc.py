"""Small stream helpers: line output and copying between file objects."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

CHUNK_SIZE = 100


def puts(text: str, stream: Optional[TextIO] = None) -> int:
    """Write ``text`` and a newline; return the number of characters written."""
    out = sys.stdout if stream is None else stream
    out.write(text)
    out.write("\n")
    return len(text) + 1


def cp(source: Any, dest: Any) -> int:
    """Copy everything readable from ``source`` to ``dest``.

    Reads at most ``CHUNK_SIZE`` units at a time and retries partial
    writes.  Works with text or binary file objects and returns the number
    of units copied.  Read and write errors propagate; a write that makes
    no progress raises ``OSError``.
    """
    total = 0
    while True:
        chunk = source.read(CHUNK_SIZE)
        if not chunk:
            return total
        while chunk:
            written = dest.write(chunk)
            if written is None:
                written = len(chunk)
            if written <= 0:
                raise OSError("write made no progress")
            total += written
            chunk = chunk[written:]