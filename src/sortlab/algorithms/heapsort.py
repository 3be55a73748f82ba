"""
Heap sort on a view range: the guaranteed O(n log n) fallback of the hybrid engine.

A max-heap is built over s[first:last] with the root at `first`, then the
root is repeatedly swapped to the end of the shrinking heap. Not stable.
"""

from __future__ import annotations

from typing import Any, MutableSequence, Optional

from ..observers import Observer
from ..view import SortView, check_range

__all__ = ["heap_sort_range", "sort"]


def _sift_down(s: SortView, base: int, root: int, size: int) -> None:
    while True:
        child = 2 * root + 1
        if child >= size:
            return
        if child + 1 < size and s.compare(base + child, base + child + 1) < 0:
            child += 1
        if s.compare(base + root, base + child) >= 0:
            return
        s.swap(base + root, base + child)
        root = child


def heap_sort_range(s: SortView, first: int, last: int) -> None:
    """Sort s[first:last] in place (half-open range, absolute indices)."""
    n = last - first
    if n <= 1:
        return
    for root in range(n // 2 - 1, -1, -1):
        _sift_down(s, first, root, n)
    for end in range(n - 1, 0, -1):
        s.swap(first, first + end)
        _sift_down(s, first, 0, end)


def sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
) -> None:
    first, last = check_range(len(buffer), first, last)
    if last - first <= 1:
        return
    heap_sort_range(SortView(buffer, first, last, observer), first, last)
