"""A block device interface and a hashed LRU buffer cache in front of it."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Dict

DEFAULT_CAPACITY = 997


class BlockDevice(ABC):
    """A device that reads fixed-size blocks by number."""

    def __init__(self, block_size: int) -> None:
        if block_size <= 0:
            raise ValueError("block size must be positive")
        self.block_size = block_size

    @abstractmethod
    def read_block(self, block_number: int) -> bytes:
        """Return the ``block_size`` bytes of block ``block_number``."""

    @abstractmethod
    def size_in_bytes(self) -> int:
        """Total size of the device in bytes."""


class BufferCache(BlockDevice):
    """Caches blocks of another device.

    Blocks are hashed into ``capacity`` buckets, each ordered from most to
    least recently used, and the buckets themselves are kept in recency
    order.  When a newly read block would bring the cache to ``capacity``
    blocks, the least recently used block of the least recently used bucket
    is evicted, so at most ``capacity - 1`` blocks are held.
    """

    def __init__(self, device: BlockDevice, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        super().__init__(device.block_size)
        self._device = device
        self.capacity = capacity
        self._buckets: Dict[int, "OrderedDict[int, bytes]"] = {}
        self._recency: "OrderedDict[int, None]" = OrderedDict()
        self._count = 0
        self._lock = threading.Lock()

    def size_in_bytes(self) -> int:
        return self._device.size_in_bytes()

    def read_block(self, block_number: int) -> bytes:
        """Return the contents of a block, reading the device on a miss."""
        if block_number < 0:
            raise ValueError("block number must not be negative")
        index = block_number % self.capacity
        with self._lock:
            bucket = self._buckets.setdefault(index, OrderedDict())
            data = bucket.pop(block_number, None)
            if data is None:
                data = bytes(self._device.read_block(block_number))
                if len(data) != self.block_size:
                    raise ValueError(
                        f"device returned {len(data)} bytes for a "
                        f"{self.block_size}-byte block"
                    )
                if self._count + 1 >= self.capacity:
                    self._evict()
                self._count += 1
            bucket[block_number] = data
            bucket.move_to_end(block_number, last=False)
            self._recency[index] = None
            self._recency.move_to_end(index, last=False)
            return data

    def _evict(self) -> None:
        oldest, _ = self._recency.popitem(last=True)
        bucket = self._buckets[oldest]
        if bucket:
            bucket.popitem(last=True)
            self._count -= 1

    def __len__(self) -> int:
        return self._count

    def __contains__(self, block_number: object) -> bool:
        if not isinstance(block_number, int) or block_number < 0:
            return False
        bucket = self._buckets.get(block_number % self.capacity)
        return bucket is not None and block_number in bucket