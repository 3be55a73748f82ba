"""
Hoare bidirectional partition shared by the single-pivot algorithms.
"""

from __future__ import annotations

from typing import Any, Tuple

from ..view import SortView

__all__ = ["hoare_partition"]


def hoare_partition(s: SortView, left: int, right: int, pivot: Any) -> Tuple[int, int]:
    """
    Partition s[left..right] (inclusive) around a pivot value taken from that range.

    Returns (l, r) such that s[left..r] <= pivot <= s[l..right]. Both parts are
    strictly smaller than the input range because the first exchange always
    happens and advances both cursors, duplicates included.
    """
    l, r = left, right
    while l <= r:
        while l < right and s.compare_value(l, pivot) < 0:
            l += 1
        while r > left and s.compare_value(r, pivot) > 0:
            r -= 1
        if l <= r:
            if l != r:
                s.swap(l, r)
            l += 1
            r -= 1
    return l, r
