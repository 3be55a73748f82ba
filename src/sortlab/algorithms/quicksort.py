"""
Plain partition-exchange sort (no depth budget).

Same Hoare partition and insertion cut-off as the introspective engine, with a
selectable pivot policy:

    "median3"  quartile median-of-three
    "median9"  Tukey's ninther

Without the heap-sort fallback, adversarial inputs drive it quadratic; it is
kept as the baseline the hybrid engine is measured against.
"""

from __future__ import annotations

from typing import Any, Callable, MutableSequence, Optional

from ..observers import Observer
from ..view import SortView, check_range
from .insertion import insertion_sort_range
from .partition import hoare_partition
from .pivot import PIVOT_POLICIES, pivot_policy

__all__ = ["PIVOT_POLICIES", "INSERTION_THRESHOLD", "quick_sort", "sort"]

INSERTION_THRESHOLD = 16


def _quick_loop(
    s: SortView,
    left: int,
    right: int,
    choose: Callable[[SortView, int, int], Any],
    threshold: int,
) -> None:
    while right > left:
        if right - left + 1 <= threshold:
            insertion_sort_range(s, left, right + 1)
            return
        l, r = hoare_partition(s, left, right, choose(s, left, right))
        if r - left < right - l:
            if left < r:
                _quick_loop(s, left, r, choose, threshold)
            left = l
        else:
            if l < right:
                _quick_loop(s, l, right, choose, threshold)
            right = r


def quick_sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
    *,
    pivot: str = "median3",
    insertion_threshold: int = INSERTION_THRESHOLD,
) -> None:
    choose = pivot_policy(pivot)
    if insertion_threshold < 1:
        raise ValueError("insertion_threshold must be >= 1")
    first, last = check_range(len(buffer), first, last)
    if last - first <= 1:
        return
    s = SortView(buffer, first, last, observer)
    _quick_loop(s, first, last - 1, choose, insertion_threshold)


sort = quick_sort
