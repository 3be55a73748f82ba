"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth:
- correct total order for any element type with `<`
- deterministic and portable
- stable, so it also serves as the reference for stability checks

Public API (stable):
    oracle_sort(a: Sequence[T]) -> list[T]
    equals_oracle(a: Sequence[T], out: Sequence[T]) -> bool

The oracle never mutates its input and always returns a **new** list.
"""

from __future__ import annotations

from typing import Any, List, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[Any]) -> List[Any]:
    """Return a new list with the elements of `a` in non-decreasing order."""
    return sorted(a)


def equals_oracle(a: Sequence[Any], out: Sequence[Any]) -> bool:
    """
    True iff `out` equals `oracle_sort(a)` element for element.

    `out` may be any sequence (a sorted-in-place list, an array.array, ...).
    """
    return list(out) == oracle_sort(a)
