"""
Observers: pluggable sinks for the four instrumented operations.

Every algorithm reports its element accesses through a `SortView`, which in
turn notifies exactly one observer per top-level sort call:

    on_compare(i, j, result, buffer_a, buffer_b)
    on_swap(i, j, buffer_id)
    on_read(i, buffer_id)
    on_write(i, buffer_id)

Index `-1` stands for "a value that is not read from a buffer" (a pivot held in
a local, for example).

Public API (stable):
    Observer                 structural protocol
    NullObserver / NULL_OBSERVER
    StatisticsObserver       four counters, safe to share across threads
    CallbackObserver         forwards events to callables (visualization)
    RecordingObserver        keeps an ordered list of SortEvent tuples
    CompositeObserver        fans events out to several observers in order
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol, Sequence

__all__ = [
    "Observer",
    "NullObserver",
    "NULL_OBSERVER",
    "StatisticsObserver",
    "CallbackObserver",
    "SortEvent",
    "RecordingObserver",
    "CompositeObserver",
]


class Observer(Protocol):
    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None: ...

    def on_swap(self, i: int, j: int, buffer_id: int) -> None: ...

    def on_read(self, i: int, buffer_id: int) -> None: ...

    def on_write(self, i: int, buffer_id: int) -> None: ...


class NullObserver:
    """No-op observer. `SortView` recognises it and skips notification entirely."""

    __slots__ = ()

    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None:
        pass

    def on_swap(self, i: int, j: int, buffer_id: int) -> None:
        pass

    def on_read(self, i: int, buffer_id: int) -> None:
        pass

    def on_write(self, i: int, buffer_id: int) -> None:
        pass


NULL_OBSERVER = NullObserver()


# Shard slots
_COMPARE, _SWAP, _READ, _WRITE = 0, 1, 2, 3


class StatisticsObserver:
    """
    Count comparisons, swaps, index reads and index writes.

    One instance may be shared by several sorts running concurrently on
    different threads. Each thread increments its own shard (no lock on the
    hot path); the public counters sum the shards when read. `reset()` is
    meant to be called between runs, not while sorts are in flight.
    """

    def __init__(self) -> None:
        self._local = threading.local()
        self._shards: List[List[int]] = []

    def _shard(self) -> List[int]:
        try:
            return self._local.counts
        except AttributeError:
            counts = [0, 0, 0, 0]
            self._local.counts = counts
            # list.append is atomic; a shard is registered once per thread
            self._shards.append(counts)
            return counts

    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None:
        self._shard()[_COMPARE] += 1

    def on_swap(self, i: int, j: int, buffer_id: int) -> None:
        self._shard()[_SWAP] += 1

    def on_read(self, i: int, buffer_id: int) -> None:
        self._shard()[_READ] += 1

    def on_write(self, i: int, buffer_id: int) -> None:
        self._shard()[_WRITE] += 1

    def _total(self, slot: int) -> int:
        return sum(shard[slot] for shard in list(self._shards))

    @property
    def compare_count(self) -> int:
        return self._total(_COMPARE)

    @property
    def swap_count(self) -> int:
        return self._total(_SWAP)

    @property
    def index_read_count(self) -> int:
        return self._total(_READ)

    @property
    def index_write_count(self) -> int:
        return self._total(_WRITE)

    def snapshot(self) -> Dict[str, int]:
        """Return all four counters as a plain dict (handy for result records)."""
        return {
            "compares": self.compare_count,
            "swaps": self.swap_count,
            "index_reads": self.index_read_count,
            "index_writes": self.index_write_count,
        }

    def reset(self) -> None:
        for shard in list(self._shards):
            shard[:] = [0, 0, 0, 0]

    def __repr__(self) -> str:
        s = self.snapshot()
        return (
            f"StatisticsObserver(compares={s['compares']}, swaps={s['swaps']}, "
            f"index_reads={s['index_reads']}, index_writes={s['index_writes']})"
        )


class CallbackObserver:
    """
    Forward events to optional callables, e.g. a renderer that animates the sort.

    Callbacks receive the same positional arguments as the observer methods.
    """

    __slots__ = ("_on_compare", "_on_swap", "_on_read", "_on_write")

    def __init__(
        self,
        on_compare: Optional[Callable[[int, int, int, int, int], None]] = None,
        on_swap: Optional[Callable[[int, int, int], None]] = None,
        on_read: Optional[Callable[[int, int], None]] = None,
        on_write: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self._on_compare = on_compare
        self._on_swap = on_swap
        self._on_read = on_read
        self._on_write = on_write

    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None:
        if self._on_compare is not None:
            self._on_compare(i, j, result, buffer_a, buffer_b)

    def on_swap(self, i: int, j: int, buffer_id: int) -> None:
        if self._on_swap is not None:
            self._on_swap(i, j, buffer_id)

    def on_read(self, i: int, buffer_id: int) -> None:
        if self._on_read is not None:
            self._on_read(i, buffer_id)

    def on_write(self, i: int, buffer_id: int) -> None:
        if self._on_write is not None:
            self._on_write(i, buffer_id)


class SortEvent(NamedTuple):
    kind: str  # "compare" | "swap" | "read" | "write"
    i: int
    j: int = -1
    result: int = 0
    buffer_id: int = 0
    other_buffer_id: int = 0


class RecordingObserver:
    """Keep every event in call order; used for playback and for tests."""

    def __init__(self) -> None:
        self.events: List[SortEvent] = []

    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None:
        self.events.append(SortEvent("compare", i, j, result, buffer_a, buffer_b))

    def on_swap(self, i: int, j: int, buffer_id: int) -> None:
        self.events.append(SortEvent("swap", i, j, 0, buffer_id, buffer_id))

    def on_read(self, i: int, buffer_id: int) -> None:
        self.events.append(SortEvent("read", i, -1, 0, buffer_id, buffer_id))

    def on_write(self, i: int, buffer_id: int) -> None:
        self.events.append(SortEvent("write", i, -1, 0, buffer_id, buffer_id))

    def kinds(self) -> List[str]:
        return [e.kind for e in self.events]

    def count(self, kind: str) -> int:
        return sum(1 for e in self.events if e.kind == kind)

    def clear(self) -> None:
        self.events.clear()


class CompositeObserver:
    """Deliver each event to every wrapped observer, in the order given."""

    def __init__(self, *observers: Observer) -> None:
        self._observers: Sequence[Observer] = tuple(observers)

    def on_compare(self, i: int, j: int, result: int, buffer_a: int, buffer_b: int) -> None:
        for o in self._observers:
            o.on_compare(i, j, result, buffer_a, buffer_b)

    def on_swap(self, i: int, j: int, buffer_id: int) -> None:
        for o in self._observers:
            o.on_swap(i, j, buffer_id)

    def on_read(self, i: int, buffer_id: int) -> None:
        for o in self._observers:
            o.on_read(i, buffer_id)

    def on_write(self, i: int, buffer_id: int) -> None:
        for o in self._observers:
            o.on_write(i, buffer_id)
