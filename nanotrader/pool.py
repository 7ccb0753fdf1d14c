"""Bounded object pool that limits how many live objects may exist."""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class PoolAllocator(Generic[T]):
    """Hands out up to ``pool_size`` objects built by ``factory``.

    Objects count against the pool until they are given back with ``destroy``.
    """

    def __init__(self, factory: Callable[..., T], pool_size: int = 1_000_000) -> None:
        if pool_size < 0:
            raise ValueError("pool_size must not be negative")
        self._factory = factory
        self._pool_size = pool_size
        self._live: Dict[int, T] = {}

    def construct(self, *args: Any, **kwargs: Any) -> T:
        """Build an object from the pool; raise MemoryError when exhausted."""
        if len(self._live) >= self._pool_size:
            raise MemoryError(f"pool of {self._pool_size} objects is exhausted")
        obj = self._factory(*args, **kwargs)
        self._live[id(obj)] = obj
        return obj

    def destroy(self, obj: Optional[T]) -> None:
        """Return an object to the pool; None is ignored."""
        if obj is None:
            return
        if self._live.get(id(obj)) is not obj:
            raise ValueError("object was not constructed by this pool")
        del self._live[id(obj)]

    def available_count(self) -> int:
        return self._pool_size - len(self._live)

    def capacity(self) -> int:
        return self._pool_size