"""Splitting a file-system path into a queue of components."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional, Union

ROOT = "/"


class Path:
    """A path as a FIFO of components.

    An absolute path starts with a ``"/"`` component; repeated and trailing
    slashes produce no empty components.
    """

    def __init__(self, text: str = "") -> None:
        parts: Deque[str] = deque()
        if text.startswith("/"):
            parts.append(ROOT)
        parts.extend(part for part in text.split("/") if part)
        self._parts = parts

    def remove(self) -> Optional[str]:
        """Remove and return the first component, or ``None`` when empty."""
        if not self._parts:
            return None
        return self._parts.popleft()

    def is_empty(self) -> bool:
        return not self._parts

    def clear(self) -> None:
        self._parts.clear()

    def merge_symbolic_link(self, other: Union["Path", str]) -> None:
        """Put the components of ``other`` in front of the remaining ones."""
        if isinstance(other, str):
            other = Path(other)
        self._parts.extendleft(reversed(other._parts))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._parts))

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        return f"Path({list(self._parts)!r})"