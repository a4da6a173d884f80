"""A first-fit heap of 32-bit words with boundary tags.

Every block carries its size in words in a header and a matching footer:
positive for a free block, negative for a taken one.  Free blocks form a
doubly linked list (next in the second word, previous in the third) with
the most recently freed block at its head.  Pointers handed out are byte
offsets from the start of the heap; offset 0 is the result of a
zero-byte allocation.
"""

from __future__ import annotations

from typing import Optional

WORD_SIZE = 4
DEFAULT_WORDS = 0x100000
_MIN_BLOCK = 4
_MIN_WORDS = 8


class FirstFitHeap:
    """A first-fit allocator over a fixed array of words."""

    def __init__(self, words: int = DEFAULT_WORDS) -> None:
        if words < _MIN_WORDS:
            raise ValueError(f"a heap needs at least {_MIN_WORDS} words")
        self._length = words
        self._memory = bytearray(words * WORD_SIZE)
        self._words = memoryview(self._memory).cast("i")
        self._avail = 0
        self._make_taken(0, 2)
        self._make_avail(2, words - 4)
        self._make_taken(words - 2, 2)

    # -- block bookkeeping -------------------------------------------------

    def _size(self, i: int) -> int:
        return abs(self._words[i])

    def _is_avail(self, i: int) -> bool:
        return self._words[i] > 0

    def _is_taken(self, i: int) -> bool:
        return self._words[i] < 0

    def _make_avail(self, i: int, size: int) -> None:
        words = self._words
        words[i] = size
        words[i + size - 1] = size
        words[i + 1] = self._avail
        words[i + 2] = 0
        if self._avail != 0:
            words[self._avail + 2] = i
        self._avail = i

    def _make_taken(self, i: int, size: int) -> None:
        self._words[i] = -size
        self._words[i + size - 1] = -size

    def _unlink(self, i: int) -> None:
        words = self._words
        prev_index = words[i + 2]
        next_index = words[i + 1]
        if prev_index == 0:
            self._avail = next_index
        else:
            words[prev_index + 1] = next_index
        if next_index != 0:
            words[next_index + 2] = prev_index

    def _left(self, i: int) -> int:
        footer = i - 1
        return footer - self._size(footer) + 1

    def _taken_index(self, ptr: int) -> int:
        if not isinstance(ptr, int) or ptr % WORD_SIZE:
            raise ValueError(f"{ptr!r} is not a heap pointer")
        index = ptr // WORD_SIZE - 1
        if not 0 < index < self._length - 2 or not self._is_taken(index):
            raise ValueError(f"{ptr!r} does not point to an allocated block")
        return index

    def _capacity(self, index: int) -> int:
        return (self._size(index) - 2) * WORD_SIZE

    def _check_span(self, ptr: int, nbytes: int) -> None:
        if nbytes < 0:
            raise ValueError("byte count must not be negative")
        if nbytes == 0:
            return
        index = self._taken_index(ptr)
        if nbytes > self._capacity(index):
            raise ValueError(
                f"{nbytes} bytes exceed the block's {self._capacity(index)} bytes"
            )

    # -- public interface --------------------------------------------------

    def malloc(self, nbytes: int) -> int:
        """Allocate ``nbytes`` bytes and return a pointer to them.

        Raises MemoryError when no free block is large enough.
        """
        if nbytes < 0:
            raise ValueError("byte count must not be negative")
        if nbytes == 0:
            return 0
        wanted = max((nbytes + 3) // WORD_SIZE + 2, _MIN_BLOCK)
        p = self._avail
        while p != 0:
            size = self._size(p)
            if size >= wanted:
                self._unlink(p)
                extra = size - wanted
                if extra >= _MIN_BLOCK:
                    self._make_taken(p, wanted)
                    self._make_avail(p + wanted, extra)
                else:
                    self._make_taken(p, size)
                return (p + 1) * WORD_SIZE
            p = self._words[p + 1]
        raise MemoryError(f"heap is full, cannot allocate {nbytes} bytes")

    def free(self, ptr: Optional[int]) -> None:
        """Release a block, merging it with free neighbours."""
        if ptr is None or ptr == 0:
            return
        index = self._taken_index(ptr)
        size = self._size(index)
        left = self._left(index)
        right = index + size
        if self._is_avail(left):
            self._unlink(left)
            index = left
            size += self._size(left)
        if self._is_avail(right):
            self._unlink(right)
            size += self._size(right)
        self._make_avail(index, size)

    def realloc(self, ptr: Optional[int], new_size: int) -> Optional[int]:
        """Move a block to one of ``new_size`` bytes, keeping its contents.

        A ``None`` or zero pointer behaves like ``malloc``; a zero size frees
        the block and returns ``None``.
        """
        if ptr is None or ptr == 0:
            return self.malloc(new_size)
        if new_size == 0:
            self.free(ptr)
            return None
        index = self._taken_index(ptr)
        kept = min(new_size, self._capacity(index))
        new_ptr = self.malloc(new_size)
        self._memory[new_ptr:new_ptr + kept] = self._memory[ptr:ptr + kept]
        self.free(ptr)
        return new_ptr

    def read(self, ptr: int, nbytes: int) -> bytes:
        """The first ``nbytes`` bytes of the block at ``ptr``."""
        self._check_span(ptr, nbytes)
        return bytes(self._memory[ptr:ptr + nbytes])

    def write(self, ptr: int, data: bytes) -> int:
        """Store ``data`` at the start of the block at ``ptr``."""
        data = bytes(data)
        self._check_span(ptr, len(data))
        self._memory[ptr:ptr + len(data)] = data
        return len(data)