"""
Instrumentation contract of SortView.

What we check:
- Event order for read / write / compare / swap
- The -1 sentinel for values held outside the buffer
- Writes notify before the value is stored
- Bounds checks on every access and on construction
- Buffer ids are carried into every event
"""

from __future__ import annotations

import numpy as np
import pytest

from sortlab import (
    BUFFER_MAIN,
    BUFFER_SCRATCH,
    CallbackObserver,
    IndexOutOfRangeError,
    NullObserver,
    RecordingObserver,
    SortEvent,
    SortLabError,
    SortView,
    StatisticsObserver,
    check_range,
)
from sortlab.view import three_way


def test_three_way_uses_less_than_only() -> None:
    assert three_way(1, 2) == -1
    assert three_way(2, 1) == 1
    assert three_way(3, 3) == 0


def test_compare_emits_two_reads_then_compare() -> None:
    rec = RecordingObserver()
    s = SortView([1, 2], observer=rec)

    assert s.compare(0, 1) == -1
    assert rec.events == [
        SortEvent("read", 0, -1, 0, BUFFER_MAIN, BUFFER_MAIN),
        SortEvent("read", 1, -1, 0, BUFFER_MAIN, BUFFER_MAIN),
        SortEvent("compare", 0, 1, -1, BUFFER_MAIN, BUFFER_MAIN),
    ]


def test_swap_event_order_and_effect() -> None:
    rec = RecordingObserver()
    buf = ["a", "b", "c"]
    s = SortView(buf, observer=rec)

    s.swap(0, 2)

    assert buf == ["c", "b", "a"]
    assert [(e.kind, e.i) for e in rec.events] == [
        ("read", 0),
        ("read", 2),
        ("swap", 0),
        ("write", 0),
        ("write", 2),
    ]
    assert rec.events[2].j == 2


def test_write_notifies_before_storing() -> None:
    buf = [10, 20]
    seen = []
    s = SortView(buf, observer=CallbackObserver(on_write=lambda i, b: seen.append(buf[i])))

    s.write(1, 99)

    assert seen == [20]
    assert buf == [10, 99]


def test_held_value_sentinels() -> None:
    rec = RecordingObserver()
    s = SortView([5, 7], observer=rec)

    assert s.compare_value(0, 6) == -1
    assert s.compare_to(6, 1) == -1
    assert s.compare_values(6, 6) == 0

    compares = [e for e in rec.events if e.kind == "compare"]
    assert [(e.i, e.j) for e in compares] == [(0, -1), (-1, 1), (-1, -1)]
    # compare_values never reads the buffer
    assert rec.kinds() == ["read", "compare", "read", "compare", "compare"]


def test_statistics_counts_one_swap() -> None:
    stats = StatisticsObserver()
    s = SortView([2, 1], observer=stats)
    s.swap(0, 1)
    assert stats.snapshot() == {"compares": 0, "swaps": 1, "index_reads": 2, "index_writes": 2}


def test_null_observer_is_dropped() -> None:
    s = SortView([1], observer=NullObserver())
    assert s.observer is None
    assert s.read(0) == 1


def test_scratch_buffer_id_is_reported() -> None:
    rec = RecordingObserver()
    s = SortView([None, None], observer=rec, buffer_id=BUFFER_SCRATCH)
    s.write(1, 3)
    s.read(1)
    assert s.buffer_id == BUFFER_SCRATCH
    assert all(e.buffer_id == BUFFER_SCRATCH for e in rec.events)


@pytest.mark.parametrize("i", [-1, 1, 5, 6])
def test_access_outside_view_range_raises(i: int) -> None:
    buf = list(range(6))
    s = SortView(buf, 2, 5)
    with pytest.raises(IndexOutOfRangeError):
        s.read(i)
    with pytest.raises(IndexOutOfRangeError):
        s.write(i, 0)
    assert buf == list(range(6))


def test_view_range_and_length() -> None:
    s = SortView(list(range(10)), 3, 7)
    assert (s.first, s.last, len(s)) == (3, 7, 4)
    assert s.read(3) == 3 and s.read(6) == 6


def test_numpy_buffer() -> None:
    arr = np.array([3, 1, 2])
    s = SortView(arr)
    s.swap(0, 1)
    assert arr.tolist() == [1, 3, 2]


@pytest.mark.parametrize("first,last", [(-1, 2), (0, 4), (3, 2)])
def test_check_range_rejects(first: int, last: int) -> None:
    with pytest.raises(IndexOutOfRangeError):
        check_range(3, first, last)
    with pytest.raises(IndexOutOfRangeError):
        SortView([1, 2, 3], first, last)


def test_check_range_defaults_and_error_hierarchy() -> None:
    assert check_range(5) == (0, 5)
    assert check_range(5, 2) == (2, 5)
    assert check_range(0) == (0, 0)
    assert issubclass(IndexOutOfRangeError, SortLabError)
    assert issubclass(IndexOutOfRangeError, IndexError)
