"""Thread synchronisation primitives: a locked FIFO queue, a counting
semaphore, a blocking lock, a bounded buffer and a blocking queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Queue(Generic[T]):
    """A FIFO queue guarded by a lock; ``remove`` never blocks."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    def add(self, item: T) -> None:
        """Append ``item`` at the back of the queue."""
        if item is None:
            raise ValueError("cannot add None to a queue")
        with self._lock:
            self._items.append(item)

    def add_front(self, item: T) -> None:
        """Insert ``item`` at the front of the queue."""
        if item is None:
            raise ValueError("cannot add None to a queue")
        with self._lock:
            self._items.appendleft(item)

    def remove(self) -> Optional[T]:
        """Remove and return the front item, or ``None`` if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def remove_all(self) -> List[T]:
        """Remove every item and return them in queue order."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
            return items

    def is_empty(self) -> bool:
        """Whether the queue is empty at the moment of the call."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class Semaphore:
    """A counting semaphore."""

    def __init__(self, count: int = 0) -> None:
        if count < 0:
            raise ValueError("semaphore count must not be negative")
        self._count = count
        self._cond = threading.Condition()

    def down(self) -> None:
        """Decrement the count, blocking while it is zero."""
        with self._cond:
            while self._count == 0:
                self._cond.wait()
            self._count -= 1

    def up(self) -> None:
        """Increment the count, waking one blocked caller if any."""
        with self._cond:
            self._count += 1
            self._cond.notify()


class BlockingLock:
    """A mutual-exclusion lock built on a semaphore of one."""

    def __init__(self) -> None:
        self._sem = Semaphore(1)

    def lock(self) -> None:
        self._sem.down()

    def unlock(self) -> None:
        self._sem.up()

    def __enter__(self) -> "BlockingLock":
        self.lock()
        return self

    def __exit__(self, *args) -> None:
        self.unlock()


class BoundedBuffer(Generic[T]):
    """A fixed-capacity FIFO buffer: ``put`` blocks when full, ``get`` when empty."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: Deque[T] = deque()
        self._empty_slots = Semaphore(capacity)
        self._full_slots = Semaphore(0)
        self._lock = threading.Lock()

    def put(self, value: T) -> None:
        self._empty_slots.down()
        with self._lock:
            self._items.append(value)
        self._full_slots.up()

    def get(self) -> T:
        self._full_slots.down()
        with self._lock:
            value = self._items.popleft()
        self._empty_slots.up()
        return value


class BlockingQueue(Generic[T]):
    """A FIFO queue whose ``remove`` blocks until an item is available."""

    def __init__(self) -> None:
        self._data: Queue[T] = Queue()
        self._available = Semaphore(0)

    def add(self, item: T) -> None:
        if item is None:
            raise ValueError("cannot add None to a blocking queue")
        self._data.add(item)
        self._available.up()

    def remove(self) -> T:
        """Remove and return the front item, waiting for one if needed."""
        item = None
        while item is None:
            self._available.down()
            item = self._data.remove()
        return item

    def remove_all(self) -> List[T]:
        """Remove every queued item without blocking."""
        return self._data.remove_all()