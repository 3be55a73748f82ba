"""
Pivot sampling policies.

Both return a pivot *value* (read once from the buffer); the algorithms then
compare elements against that held value. Neither swaps anything.

Policies are looked up by name in PIVOT_POLICIES ("median3", "median9").

median_of_three reproduces a fixed comparison sequence (2 or 3 compares) so
comparison counts are deterministic:

    compare(low, mid)
    low > mid:   compare(mid, high); mid > high -> mid, else compare(low, high)
    low <= mid:  compare(mid, high); mid <= high -> mid, else compare(low, high)
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..view import SortView

__all__ = [
    "median_of_three_index",
    "median_of_three",
    "quartile_median_of_three",
    "median_of_nine",
    "PIVOT_POLICIES",
    "pivot_policy",
]


def median_of_three_index(s: SortView, low: int, mid: int, high: int) -> int:
    if s.compare(low, mid) > 0:
        if s.compare(mid, high) > 0:
            return mid
        return high if s.compare(low, high) > 0 else low
    if s.compare(mid, high) > 0:
        return low if s.compare(low, high) > 0 else high
    return mid


def median_of_three(s: SortView, low: int, mid: int, high: int) -> Any:
    return s.read(median_of_three_index(s, low, mid, high))


def median_of_nine(s: SortView, left: int, right: int) -> Any:
    """
    Tukey's ninther over nine evenly spaced samples of s[left..right] (inclusive).

    Ranges shorter than nine elements use the quartile median-of-three instead.
    """
    size = right - left + 1
    if size < 9:
        return median_of_three(s, left + size // 4, left + size // 2, left + (size * 3) // 4)
    step = (size - 1) // 8
    p = [left + k * step for k in range(9)]
    m1 = median_of_three_index(s, p[0], p[1], p[2])
    m2 = median_of_three_index(s, p[3], p[4], p[5])
    m3 = median_of_three_index(s, p[6], p[7], p[8])
    return s.read(median_of_three_index(s, m1, m2, m3))


def quartile_median_of_three(s: SortView, left: int, right: int) -> Any:
    """Median of the samples at left + n/4, left + n/2 and left + 3n/4 of s[left..right]."""
    size = right - left + 1
    return median_of_three(s, left + size // 4, left + size // 2, left + (size * 3) // 4)


PIVOT_POLICIES: Dict[str, Callable[[SortView, int, int], Any]] = {
    "median3": quartile_median_of_three,
    "median9": median_of_nine,
}


def pivot_policy(name: str) -> Callable[[SortView, int, int], Any]:
    if name not in PIVOT_POLICIES:
        raise ValueError(f"Unknown pivot policy: {name!r}. Supported: {sorted(PIVOT_POLICIES)}")
    return PIVOT_POLICIES[name]
