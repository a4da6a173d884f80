"""Bookkeeping of virtual memory regions within an address range."""

from __future__ import annotations

import threading
from bisect import bisect_left
from dataclasses import dataclass, replace
from typing import Any, List, Optional

PAGE_SIZE = 4096


class AddressSpaceFull(Exception):
    """Raised when no region of the requested size can be allocated."""


@dataclass
class VMEEntry:
    """A mapped region: ``num_pages`` pages starting at ``start``."""

    start: int
    num_pages: int
    size: int
    file: Any = None
    file_offset: int = 0
    user: bool = False

    @property
    def end(self) -> int:
        return self.start + self.num_pages * PAGE_SIZE

    def __contains__(self, va: object) -> bool:
        return isinstance(va, int) and self.start <= va < self.end


@dataclass
class FreeEntry:
    """A hole of ``num_pages`` free pages starting at ``start``."""

    start: int
    num_pages: int

    @property
    def end(self) -> int:
        return self.start + self.num_pages * PAGE_SIZE


class VME:
    """Allocator of page-aligned regions between ``start`` and ``end``.

    Fresh regions are carved from a bump pointer; released regions become
    holes that are reused first-fit and merged when adjacent.
    """

    def __init__(self, start: int, end: int) -> None:
        if end < start:
            raise ValueError("end must not be below start")
        self.avail = start
        self.limit = end
        self.entries: List[VMEEntry] = []
        self.free_entries: List[FreeEntry] = []
        self._lock = threading.Lock()

    def get(self, va: int) -> Optional[VMEEntry]:
        """The region containing ``va``, or ``None``."""
        with self._lock:
            return next((entry for entry in self.entries if va in entry), None)

    def add_entry(self, size: int, file: Any = None, file_offset: int = 0,
                  user: bool = False) -> int:
        """Allocate a region of ``size`` bytes and return its start address."""
        if size < 0:
            raise ValueError("size must not be negative")
        required = -(-size // PAGE_SIZE)
        with self._lock:
            va: Optional[int] = None
            for position, hole in enumerate(self.free_entries):
                if hole.num_pages >= required:
                    va = hole.start
                    hole.start += required * PAGE_SIZE
                    hole.num_pages -= required
                    if hole.num_pages == 0:
                        del self.free_entries[position]
                    break
            if va is None:
                if self.avail + size > self.limit:
                    raise AddressSpaceFull(
                        f"no room for {size} bytes below {self.limit:#x}"
                    )
                va = self.avail
                self.avail += required * PAGE_SIZE
            self.insert_entry_sorted(va, required, size, file, file_offset, user)
            return va

    def remove_entry(self, va: int, user: bool = False) -> Optional[VMEEntry]:
        """Release the region containing ``va`` and return it.

        With ``user`` set only user regions are released.  Returns ``None``
        when no region matches.
        """
        with self._lock:
            for position, entry in enumerate(self.entries):
                if va in entry and (not user or entry.user):
                    del self.entries[position]
                    self.insert_free_space(entry.start, entry.num_pages)
                    return entry
            return None

    def insert_entry_sorted(self, start: int, num_pages: int, size: int,
                            file: Any = None, file_offset: int = 0,
                            user: bool = False) -> VMEEntry:
        """Record a region, keeping the regions ordered by start address."""
        entry = VMEEntry(start, num_pages, size, file, file_offset, user)
        position = bisect_left([e.start for e in self.entries], start)
        self.entries.insert(position, entry)
        return entry

    def insert_free_space(self, start: int, num_pages: int) -> None:
        """Record a hole, keeping holes ordered and merging adjacent ones."""
        position = bisect_left([f.start for f in self.free_entries], start)
        self.free_entries.insert(position, FreeEntry(start, num_pages))
        self.coalesce()

    def coalesce(self) -> None:
        """Merge holes that touch one another."""
        merged: List[FreeEntry] = []
        for hole in self.free_entries:
            if merged and merged[-1].end == hole.start:
                merged[-1].num_pages += hole.num_pages
            else:
                merged.append(hole)
        self.free_entries = merged

    def duplicate(self) -> "VME":
        """An independent copy; mapped files are shared, not copied."""
        copy = VME(self.avail, self.limit)
        copy.avail = self.avail
        with self._lock:
            copy.entries = [replace(entry) for entry in self.entries]
            copy.free_entries = [replace(hole) for hole in self.free_entries]
        return copy