"""
Introspective hybrid sort.

Partition-exchange with a sampled pivot and Hoare partition,
switching to insertion sort for small ranges and to heap sort once the depth
budget runs out. Worst case O(n log n); not stable.

The pivot policy is "median3" (quartile median-of-three, the default) or
"median9" (Tukey's ninther, steadier on mountain-shaped input).

State machine over an inclusive range [left, right] with depth budget d:

    size <= INSERTION_THRESHOLD  -> insertion sort, done
    d == 0                       -> heap sort, done
    otherwise                    -> d -= 1, partition, recurse into the
                                    smaller part, loop on the larger one

The budget starts at DEPTH_FACTOR * floor(log2(n)). Recursing only into the
smaller part keeps the call stack at O(log n) even before the budget is spent.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, MutableSequence, Optional

from ..observers import Observer
from ..trace import EngineTrace
from ..view import SortView, check_range
from .heapsort import heap_sort_range
from .insertion import insertion_sort_range
from .partition import hoare_partition
from .pivot import pivot_policy

__all__ = ["INSERTION_THRESHOLD", "DEPTH_FACTOR", "floor_log2", "depth_budget", "intro_sort_range", "intro_sort", "sort"]

logger = logging.getLogger(__name__)

INSERTION_THRESHOLD = 16
DEPTH_FACTOR = 2


def floor_log2(n: int) -> int:
    return n.bit_length() - 1 if n > 0 else 0


def depth_budget(n: int) -> int:
    """Budget granted to a range of n elements: 2 * floor(log2(n))."""
    return DEPTH_FACTOR * floor_log2(n)


def _intro_loop(
    s: SortView,
    left: int,
    right: int,
    depth: int,
    choose: Callable[[SortView, int, int], Any],
    trace: Optional[EngineTrace],
    level: int,
) -> None:
    while right > left:
        if trace is not None:
            trace.record_depth(depth, level)
        size = right - left + 1

        if size <= INSERTION_THRESHOLD:
            if trace is not None:
                trace.insertion_sorts += 1
            insertion_sort_range(s, left, right + 1)
            return

        if depth == 0:
            if trace is not None:
                trace.heap_fallbacks += 1
            logger.debug("introsort: depth budget exhausted on [%d, %d], heap sort fallback", left, right)
            heap_sort_range(s, left, right + 1)
            return

        depth -= 1
        l, r = hoare_partition(s, left, right, choose(s, left, right))
        if trace is not None:
            trace.partitions += 1

        if r - left < right - l:
            if left < r:
                _intro_loop(s, left, r, depth, choose, trace, level + 1)
            left = l
        else:
            if l < right:
                _intro_loop(s, l, right, depth, choose, trace, level + 1)
            right = r


def intro_sort_range(
    s: SortView,
    first: int,
    last: int,
    trace: Optional[EngineTrace] = None,
    pivot: str = "median3",
) -> None:
    """
    Sort s[first:last] (half-open) with a fresh depth budget.

    Entry point for other algorithms that already hold a view (drop/merge
    uses it for its fallback and for the side buffer).
    """
    choose = pivot_policy(pivot)
    n = last - first
    if n <= 1:
        return
    budget = depth_budget(n)
    if trace is not None:
        trace.depth_budget = budget
    _intro_loop(s, first, last - 1, budget, choose, trace, 0)


def intro_sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
    *,
    pivot: str = "median3",
    trace: Optional[EngineTrace] = None,
) -> None:
    """
    Sort buffer[first:last] in place.

    Raises IndexOutOfRangeError (before touching any element) unless
    0 <= first <= last <= len(buffer). Empty and one-element ranges return
    without emitting any event.
    Unknown `pivot` names raise ValueError.
    """
    pivot_policy(pivot)
    first, last = check_range(len(buffer), first, last)
    if last - first <= 1:
        return
    intro_sort_range(SortView(buffer, first, last, observer), first, last, trace, pivot)


sort = intro_sort
