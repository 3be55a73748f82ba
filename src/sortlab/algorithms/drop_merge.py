"""
Drop-merge sort: fast on nearly sorted input, bounded by the hybrid engine otherwise.

One pass keeps a greedy non-decreasing run in place at the front of the range
and "drops" out-of-order elements into a side buffer. The side buffer is then
sorted with the introspective engine and merged back from the right end.

Details (after Emil Ernerfeldt's drop-merge sort):
- Quick undo: if the new element is smaller than the last kept one but not
  smaller than the one before it, the last kept element is dropped instead
  (catches a single high outlier without back-tracking).
- Look-back: after RECENCY drops in a row, the kept element that caused them
  is assumed to be the mistake; the drops are undone and kept elements are
  back-tracked until the largest of the undone elements fits again.
- Early out: when len / EARLY_OUT_TEST_AT elements have been read and more
  than EARLY_OUT_DISORDER_FRACTION of them were dropped, the dropped elements
  are written back and the whole range is handed to the hybrid engine.

The side buffer is leased from a BufferPool and returned on every exit path.
An EngineTrace passed in records the fallback sort in its own fields and the
side-buffer sort in `trace.side`.
Best case O(n); worst case O(n log n). Not stable.
"""

from __future__ import annotations

import logging
from typing import Any, MutableSequence, Optional

from ..observers import Observer
from ..pool import DEFAULT_POOL, BufferPool
from ..trace import EngineTrace
from ..view import BUFFER_SCRATCH, SortView, check_range
from .introsort import intro_sort_range

__all__ = [
    "RECENCY",
    "EARLY_OUT_TEST_AT",
    "EARLY_OUT_DISORDER_FRACTION",
    "drop_merge_sort",
    "sort",
]

logger = logging.getLogger(__name__)

RECENCY = 8
EARLY_OUT_TEST_AT = 4
EARLY_OUT_DISORDER_FRACTION = 0.6


def _drop_merge(s: SortView, d: SortView, first: int, last: int, trace: Optional[EngineTrace]) -> None:
    n = last - first
    early_at = first + n // EARLY_OUT_TEST_AT
    read = write = first
    dropped = 0
    dropped_in_row = 0

    while read < last:
        if read == early_at and dropped > (read - first) * EARLY_OUT_DISORDER_FRACTION:
            # Everything processed so far is either kept in [first, write) or in
            # the side buffer, so [write, read) is free for the dropped elements.
            for i in range(dropped):
                s.write(write + i, d.read(i))
            if trace is not None:
                trace.dropped = dropped
                trace.early_fallback = True
            logger.debug(
                "drop_merge: %d of %d elements dropped after the first quarter, falling back",
                dropped, read - first,
            )
            intro_sort_range(s, first, last, trace)
            return

        if write == first or s.compare(read, write - 1) >= 0:
            if read != write:
                s.write(write, s.read(read))
            read += 1
            write += 1
            dropped_in_row = 0
            continue

        # Quick undo: 0 1 2 3 9 5 6 7, drop the 9 rather than the 5
        if dropped_in_row == 0 and write - first >= 2 and s.compare(read, write - 2) >= 0:
            d.write(dropped, s.read(write - 1))
            dropped += 1
            s.write(write - 1, s.read(read))
            read += 1
            continue

        if dropped_in_row < RECENCY:
            d.write(dropped, s.read(read))
            dropped += 1
            read += 1
            dropped_in_row += 1
            continue

        # RECENCY drops in a row: accepting the last kept element was the
        # mistake. Un-drop them (they are still intact at s[read..]) and
        # back-track until the largest of them fits after the kept run.
        dropped -= dropped_in_row
        read -= dropped_in_row

        back_tracked = 1
        write -= 1

        max_i = read
        for i in range(read + 1, read + dropped_in_row + 1):
            if s.compare(i, max_i) > 0:
                max_i = i
        max_of_dropped = s.read(max_i)
        while write > first and s.compare_to(max_of_dropped, write - 1) < 0:
            back_tracked += 1
            write -= 1

        for i in range(back_tracked):
            d.write(dropped, s.read(write + i))
            dropped += 1
        dropped_in_row = 0

    if trace is not None:
        trace.dropped = dropped
    if dropped == 0:
        return

    side = None
    if trace is not None:
        side = trace.side = EngineTrace()
    intro_sort_range(d, 0, dropped, side)

    # Merge from the right: [first, write) kept run, d[0:dropped] sorted.
    back = last
    while dropped > 0:
        dropped -= 1
        last_dropped = d.read(dropped)
        while write > first and s.compare_to(last_dropped, write - 1) < 0:
            s.write(back - 1, s.read(write - 1))
            back -= 1
            write -= 1
        s.write(back - 1, last_dropped)
        back -= 1


def drop_merge_sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
    *,
    pool: Optional[BufferPool] = None,
    trace: Optional[EngineTrace] = None,
) -> None:
    """
    Sort buffer[first:last] in place.

    The side buffer shares the observer but reports buffer id BUFFER_SCRATCH.
    """
    first, last = check_range(len(buffer), first, last)
    n = last - first
    if n <= 1:
        return
    if pool is None:
        pool = DEFAULT_POOL
    s = SortView(buffer, first, last, observer)
    with pool.lease(n) as scratch:
        d = SortView(scratch, 0, n, observer, BUFFER_SCRATCH)
        _drop_merge(s, d, first, last, trace)


sort = drop_merge_sort
