"""Bounded and unbounded queues for passing requests between stages."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque, Generic, List, Optional, TypeVar

T = TypeVar("T")


class BufferFull(Exception):
    """Raised when a bounded buffer has no free slot."""


class SPSCRingBuffer(Generic[T]):
    """Fixed-size ring buffer for one producer and one consumer.

    One slot is always kept free to tell a full buffer from an empty one,
    so a buffer of ``size`` slots holds at most ``size - 1`` items.
    ``None`` cannot be stored, since ``try_pop`` uses it to signal emptiness.
    """

    def __init__(self, size: int) -> None:
        if size < 1 or size & (size - 1):
            raise ValueError(f"size must be a power of 2, got {size}")
        self._size = size
        self._mask = size - 1
        self._slots: List[Optional[T]] = [None] * size
        self._head = 0
        self._tail = 0

    def push(self, item: T) -> None:
        """Append an item, raising BufferFull when there is no room."""
        if item is None:
            raise ValueError("None cannot be stored in the buffer")
        next_tail = (self._tail + 1) & self._mask
        if next_tail == self._head:
            raise BufferFull(f"ring buffer of capacity {self.capacity()} is full")
        self._slots[self._tail] = item
        self._tail = next_tail

    def try_push(self, item: T) -> bool:
        """Append an item; return False instead of raising when full."""
        try:
            self.push(item)
        except BufferFull:
            return False
        return True

    def try_pop(self) -> Optional[T]:
        """Remove and return the oldest item, or None when empty."""
        head = self._head
        if head == self._tail:
            return None
        item = self._slots[head]
        self._slots[head] = None
        self._head = (head + 1) & self._mask
        return item

    def pop_batch(self, func: Callable[[T], Any], max_items: Optional[int] = None) -> int:
        """Hand up to ``max_items`` oldest items to ``func``; return how many."""
        limit = self._size if max_items is None else max_items
        count = min(len(self), limit)
        for _ in range(count):
            item = self._slots[self._head]
            self._slots[self._head] = None
            self._head = (self._head + 1) & self._mask
            func(item)
        return count

    def empty(self) -> bool:
        return self._head == self._tail

    def full(self) -> bool:
        return ((self._tail + 1) & self._mask) == self._head

    def __len__(self) -> int:
        return (self._tail - self._head) & self._mask

    def capacity(self) -> int:
        return self._size - 1


class MPSCQueue(Generic[T]):
    """Unbounded queue that many producers may push to and one consumer drains."""

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, item: T) -> None:
        if item is None:
            raise ValueError("None cannot be stored in the queue")
        with self._lock:
            self._items.append(item)

    def try_pop(self) -> Optional[T]:
        """Remove and return the oldest item, or None when empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def empty(self) -> bool:
        return not self._items