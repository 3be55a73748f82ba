"""
Scratch-buffer pool with scoped acquisition.

Algorithms that need auxiliary storage (the drop/merge side buffer) lease it:

    with pool.lease(n) as scratch:
        ...

The buffer goes back to the pool on every exit path, early returns and
exceptions included. Returned buffers are cleared so the pool never keeps
caller elements alive.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .errors import PoolError

__all__ = ["BufferPool", "DEFAULT_POOL"]

logger = logging.getLogger(__name__)


class BufferPool:
    """
    Keeps up to `max_retained` released lists for reuse.

    `rent(size)` returns a list of exactly `size` slots (all None). Reuse
    prefers the smallest retained list that is large enough, trimmed to size.
    Thread-safe: the free list is guarded by a lock.
    """

    def __init__(self, max_retained: int = 4) -> None:
        if max_retained < 0:
            raise ValueError("max_retained must be nonnegative")
        self._max_retained = max_retained
        self._free: List[List[Any]] = []
        self._leased: Dict[int, List[Any]] = {}
        self._lock = threading.Lock()
        self._total_rents = 0
        self._total_reuses = 0

    def rent(self, size: int) -> List[Any]:
        if size < 0:
            raise ValueError("size must be nonnegative")
        with self._lock:
            self._total_rents += 1
            buf = None
            for k, candidate in enumerate(self._free):
                if len(candidate) >= size:
                    buf = self._free.pop(k)
                    self._total_reuses += 1
                    break
            if buf is None:
                buf = [None] * size
            else:
                del buf[size:]
            self._leased[id(buf)] = buf
        logger.debug("pool: leased %d slots (%d outstanding)", size, len(self._leased))
        return buf

    def give_back(self, buf: List[Any]) -> None:
        with self._lock:
            if self._leased.pop(id(buf), None) is None:
                raise PoolError("buffer was not leased from this pool (or already returned)")
            buf[:] = [None] * len(buf)
            if len(self._free) < self._max_retained:
                self._free.append(buf)
                self._free.sort(key=len)

    @contextmanager
    def lease(self, size: int) -> Iterator[List[Any]]:
        buf = self.rent(size)
        try:
            yield buf
        finally:
            self.give_back(buf)

    @property
    def outstanding(self) -> int:
        """Number of buffers currently leased and not yet returned."""
        with self._lock:
            return len(self._leased)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "rents": self._total_rents,
                "reuses": self._total_reuses,
                "retained": len(self._free),
                "outstanding": len(self._leased),
            }


DEFAULT_POOL = BufferPool()
