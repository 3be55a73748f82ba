"""
Exception taxonomy for sortlab.

Only precondition violations are surfaced; there are no transient or retryable
failures anywhere in the sorting core. A comparator that is not a total order
is not detected (same contract as `list.sort`).
"""

from __future__ import annotations

__all__ = ["SortLabError", "IndexOutOfRangeError", "PoolError"]


class SortLabError(Exception):
    """Base class for every error raised by sortlab."""


class IndexOutOfRangeError(SortLabError, IndexError):
    """
    An index or a `[first, last)` range falls outside the backing buffer.

    Raised by `SortView.read/write` and by every algorithm's entry check,
    always before the buffer is mutated.
    """


class PoolError(SortLabError, RuntimeError):
    """A scratch buffer was returned to a pool that does not own it."""
