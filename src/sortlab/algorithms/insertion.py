"""
Insertion sort on a view range.

The primitive every partition-exchange algorithm here delegates small ranges
to. On already-sorted input it performs exactly n-1 comparisons and no writes.
Stable.
"""

from __future__ import annotations

from typing import Any, MutableSequence, Optional

from ..observers import Observer
from ..view import SortView, check_range

__all__ = ["insertion_sort_range", "sort"]


def insertion_sort_range(s: SortView, first: int, last: int) -> None:
    """Sort s[first:last] in place (half-open range, absolute indices)."""
    for i in range(first + 1, last):
        if s.compare(i - 1, i) <= 0:
            continue
        tmp = s.read(i)
        # s[i-1] > tmp is already known; shift it without re-comparing
        s.write(i, s.read(i - 1))
        j = i - 2
        while j >= first and s.compare_value(j, tmp) > 0:
            s.write(j + 1, s.read(j))
            j -= 1
        s.write(j + 1, tmp)


def sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
) -> None:
    first, last = check_range(len(buffer), first, last)
    if last - first <= 1:
        return
    insertion_sort_range(SortView(buffer, first, last, observer), first, last)
