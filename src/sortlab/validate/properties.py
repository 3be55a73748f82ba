"""
Property helpers for validating sorting results.

Used by the tests and by the measurement harness to reject wrong outputs.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict
    assert_no_mutation(before, after) -> None
    tag_records(keys) -> list[tuple[key, id]]
    is_stable(records) -> bool

Stability cannot be inferred from bare values, since equal keys are
indistinguishable. `tag_records` pairs each key with its input position;
after sorting the records *by key only*, `is_stable` checks that equal keys
kept their relative order.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Hashable, List, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "KeyedRecord",
    "tag_records",
    "is_stable",
]


def is_nondecreasing(xs: Sequence[Any]) -> bool:
    """Return True iff not xs[i+1] < xs[i] for all i."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[Any]) -> int | None:
    """
    Return the first index i where xs[i+1] < xs[i], or None if non-decreasing.

        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(len(xs) - 1):
        if xs[i + 1] < xs[i]:
            return i
    return None


def is_permutation(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True iff `a` and `b` hold exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Hashable], b: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Return value -> (count in a) - (count in b), omitting zeros.

    Empty dict means identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[Hashable, int] = {}
    for k in set(ca) | set(cb):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Raise AssertionError if two sequences differ element-wise.

    Used to check that a rejected call (bad range) left the buffer untouched.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")


class KeyedRecord:
    """A (key, id) pair that orders by key only, so sorts can't use the id."""

    __slots__ = ("key", "id")

    def __init__(self, key: Any, id: int) -> None:
        self.key = key
        self.id = id

    def __lt__(self, other: "KeyedRecord") -> bool:
        return self.key < other.key

    def __repr__(self) -> str:
        return f"KeyedRecord({self.key!r}, {self.id})"


def tag_records(keys: Sequence[Any]) -> List[KeyedRecord]:
    return [KeyedRecord(k, i) for i, k in enumerate(keys)]


def is_stable(records: Sequence[KeyedRecord]) -> bool:
    """True iff records with equal keys appear in increasing id order."""
    for i in range(len(records) - 1):
        a, b = records[i], records[i + 1]
        if not (a < b) and not (b < a) and a.id > b.id:
            return False
    return True
