"""
Dual-pivot partition-exchange sort.

The two range endpoints serve as pivots (swapped first so that low <= high).
One scan with three cursors splits the range into

    [left .. l-1]  < low pivot
    [l+1 .. g-1]   between the pivots
    [g+1 .. right] > high pivot

with the pivots moved to l and g. The middle part is only sorted further
when the pivots differ: with equal pivots every element in it equals both.
When the middle part holds most of the range, keys equal to either pivot
are first gathered at its ends, so inputs with few distinct values (two,
say) do not go quadratic.
Ranges below the insertion threshold go to insertion sort. Not stable.

The two smaller parts are recursed into and the largest is looped on, so the
Python call stack stays O(log n) even for inputs (like sorted ones) that make
endpoint pivots degenerate.
"""

from __future__ import annotations

from typing import Any, List, MutableSequence, Optional, Tuple

from ..observers import Observer
from ..view import SortView, check_range
from .insertion import insertion_sort_range

__all__ = ["INSERTION_THRESHOLD", "dual_pivot_sort_range", "dual_pivot_sort", "sort"]

INSERTION_THRESHOLD = 16


def _gather_pivot_keys(s: SortView, l: int, g: int) -> Tuple[int, int]:
    """
    Move keys equal to the low pivot (at l) to the front of s[l+1..g-1] and keys
    equal to the high pivot (at g) to its back. Returns the bounds of what is
    left strictly between the pivots.
    """
    less, great = l + 1, g - 1
    k = less
    while k <= great:
        if s.compare(k, l) == 0:
            if k != less:
                s.swap(k, less)
            less += 1
            k += 1
        elif s.compare(k, g) == 0:
            # the element swapped in from `great` is not classified yet
            if k != great:
                s.swap(k, great)
            great -= 1
        else:
            k += 1
    return less, great


def _partition(s: SortView, left: int, right: int) -> List[Tuple[int, int]]:
    if s.compare(left, right) > 0:
        s.swap(left, right)

    l = left + 1
    k = l
    g = right - 1
    while k <= g:
        if s.compare(k, left) < 0:
            s.swap(k, l)
            k += 1
            l += 1
        elif s.compare(right, k) < 0:
            s.swap(k, g)
            g -= 1
        else:
            k += 1

    l -= 1
    g += 1
    s.swap(left, l)
    s.swap(right, g)

    parts = [(left, l - 1), (g + 1, right)]
    if s.compare(l, g) < 0:
        less, great = l + 1, g - 1
        if great - less > (right - left) * 4 // 7:
            less, great = _gather_pivot_keys(s, l, g)
        parts.append((less, great))
    return parts


def dual_pivot_sort_range(s: SortView, left: int, right: int, threshold: int = INSERTION_THRESHOLD) -> None:
    """Sort s[left..right] (inclusive bounds)."""
    while right > left:
        if right - left < threshold:
            insertion_sort_range(s, left, right + 1)
            return
        parts = _partition(s, left, right)
        parts.sort(key=lambda p: p[1] - p[0])
        for lo, hi in parts[:-1]:
            if hi > lo:
                dual_pivot_sort_range(s, lo, hi, threshold)
        left, right = parts[-1]


def dual_pivot_sort(
    buffer: MutableSequence[Any],
    first: int = 0,
    last: Optional[int] = None,
    observer: Optional[Observer] = None,
    *,
    insertion_threshold: int = INSERTION_THRESHOLD,
) -> None:
    if insertion_threshold < 1:
        raise ValueError("insertion_threshold must be >= 1")
    first, last = check_range(len(buffer), first, last)
    if last - first <= 1:
        return
    dual_pivot_sort_range(SortView(buffer, first, last, observer), first, last - 1, insertion_threshold)


sort = dual_pivot_sort
