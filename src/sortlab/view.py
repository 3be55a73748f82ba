"""
Instrumented view over a mutable buffer range.

Every algorithm in `sortlab.algorithms` touches elements only through a
`SortView`, so the attached observer sees each comparison, swap, read and
write. The view never owns or resizes the buffer; it reorders in place.

Indices are absolute positions in the backing buffer and must fall inside the
view's `[first, last)` range.

Ordering of notifications:
    - read/compare notifications are emitted before any mutation they lead to
    - swap emits two reads, then on_swap, then two writes
    - write notifies before storing

Public API (stable):
    BUFFER_MAIN, BUFFER_SCRATCH
    three_way(a, b) -> int
    check_range(length, first, last) -> (first, last)
    SortView
"""

from __future__ import annotations

from typing import Any, MutableSequence, Optional, Tuple

from .errors import IndexOutOfRangeError
from .observers import NullObserver, Observer

__all__ = ["BUFFER_MAIN", "BUFFER_SCRATCH", "three_way", "check_range", "SortView"]

# Buffer identifiers for visualization
BUFFER_MAIN = 0
BUFFER_SCRATCH = 1


def three_way(a: Any, b: Any) -> int:
    """Return -1, 0 or 1. Only `<` is required of the element type, as with `sorted`."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def check_range(length: int, first: int = 0, last: Optional[int] = None) -> Tuple[int, int]:
    """
    Validate a half-open `[first, last)` range against a buffer length.

    `last=None` means "up to the end". Raises IndexOutOfRangeError unless
    0 <= first <= last <= length.
    """
    if last is None:
        last = length
    if first < 0:
        raise IndexOutOfRangeError(f"first must be nonnegative; got {first}")
    if last > length:
        raise IndexOutOfRangeError(f"last={last} exceeds buffer length {length}")
    if first > last:
        raise IndexOutOfRangeError(f"first={first} is greater than last={last}")
    return first, last


class SortView:
    """
    Non-owning handle over `buffer[first:last]` that reports every access.

    Parameters
    ----------
    buffer : MutableSequence
        list, array.array, numpy.ndarray, ... anything indexable and assignable.
    first, last : int
        Half-open range the view may touch (defaults: the whole buffer).
    observer : Observer | None
        Event sink; None (or a NullObserver) disables notification.
    buffer_id : int
        Distinguishes the main array from scratch buffers in the events.
    """

    __slots__ = ("_buf", "_first", "_last", "_obs", "_id")

    def __init__(
        self,
        buffer: MutableSequence[Any],
        first: int = 0,
        last: Optional[int] = None,
        observer: Optional[Observer] = None,
        buffer_id: int = BUFFER_MAIN,
    ) -> None:
        first, last = check_range(len(buffer), first, last)
        self._buf = buffer
        self._first = first
        self._last = last
        self._obs = None if observer is None or isinstance(observer, NullObserver) else observer
        self._id = buffer_id

    @property
    def first(self) -> int:
        return self._first

    @property
    def last(self) -> int:
        return self._last

    @property
    def buffer_id(self) -> int:
        return self._id

    @property
    def observer(self) -> Optional[Observer]:
        return self._obs

    def __len__(self) -> int:
        return self._last - self._first

    def _check(self, i: int) -> None:
        if not (self._first <= i < self._last):
            raise IndexOutOfRangeError(
                f"index {i} outside [{self._first}, {self._last}) of buffer {self._id}"
            )

    def read(self, i: int) -> Any:
        self._check(i)
        if self._obs is not None:
            self._obs.on_read(i, self._id)
        return self._buf[i]

    def write(self, i: int, value: Any) -> None:
        self._check(i)
        if self._obs is not None:
            self._obs.on_write(i, self._id)
        self._buf[i] = value

    def compare(self, i: int, j: int) -> int:
        """Three-way comparison of buffer[i] with buffer[j]."""
        a = self.read(i)
        b = self.read(j)
        result = three_way(a, b)
        if self._obs is not None:
            self._obs.on_compare(i, j, result, self._id, self._id)
        return result

    def compare_value(self, i: int, value: Any) -> int:
        """Compare buffer[i] with a value held outside the buffer (reported as j=-1)."""
        a = self.read(i)
        result = three_way(a, value)
        if self._obs is not None:
            self._obs.on_compare(i, -1, result, self._id, self._id)
        return result

    def compare_to(self, value: Any, i: int) -> int:
        """Compare a held value with buffer[i] (reported as i=-1)."""
        b = self.read(i)
        result = three_way(value, b)
        if self._obs is not None:
            self._obs.on_compare(-1, i, result, self._id, self._id)
        return result

    def compare_values(self, a: Any, b: Any) -> int:
        """Compare two held values; counted as a comparison, never as a read."""
        result = three_way(a, b)
        if self._obs is not None:
            self._obs.on_compare(-1, -1, result, self._id, self._id)
        return result

    def swap(self, i: int, j: int) -> None:
        a = self.read(i)
        b = self.read(j)
        if self._obs is not None:
            self._obs.on_swap(i, j, self._id)
        self.write(i, b)
        self.write(j, a)

    def __repr__(self) -> str:
        return f"SortView(first={self._first}, last={self._last}, buffer_id={self._id})"
