"""
Correctness tests for every registered algorithm against the oracle (Python's built-in sorted).

What we check:
- Output exactly matches the oracle (strongest guarantee)
- Nondecreasing order (diagnostic)
- Permutation preservation (no lost/duplicated elements)
- Idempotence: sorting a sorted buffer leaves it unchanged
- Range sorts touch only [first, last)
- Bad ranges fail before any element is touched
"""

from __future__ import annotations

import array
from typing import Any, List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from sortlab import ALGORITHMS, IndexOutOfRangeError, RecordingObserver
from sortlab.validate import (
    assert_no_mutation,
    first_nondecreasing_violation_index,
    is_permutation,
    oracle_sort,
)

ALGO_NAMES = sorted(ALGORITHMS)


# ------------------------- helpers ------------------------- #

def _check_one(name: str, a: List[Any]) -> None:
    """Common assertion bundle for one input."""
    sort = ALGORITHMS[name]
    buf = list(a)
    sort(buf)

    assert buf == oracle_sort(a), f"{name}: output must exactly match the oracle"

    i = first_nondecreasing_violation_index(buf)
    assert i is None, f"{name}: not nondecreasing at i={i}: {buf[i]} > {buf[i + 1]}"
    assert is_permutation(a, buf), f"{name}: output is not a permutation of input"

    once = list(buf)
    sort(buf)
    assert buf == once, f"{name}: sorting must be idempotent"


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("name", ALGO_NAMES)
@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2],
        [5, 3, 1, 4, 2],
        list(range(40)),
        list(range(40))[::-1],
        [0, -1, 5, -10, 3, 3, 2],
        [0.5, -2.25, 3.0, 1e9, -1e-9, 0.0],
        ["pear", "apple", "fig", "banana", "apple"],
        [i % 5 for i in range(100)],
        [1] * 17 + [0] * 17,
    ],
)
def test_unit_cases(name: str, a: List[Any]) -> None:
    _check_one(name, a)


@pytest.mark.parametrize("name", ALGO_NAMES)
def test_range_sort_leaves_outside_untouched(name: str) -> None:
    buf = [5, 3, 8, 1, 9, 2, 7, 4, 6]
    ALGORITHMS[name](buf, 2, 6)
    assert buf == [5, 3, 1, 2, 8, 9, 7, 4, 6]


@pytest.mark.parametrize("name", ALGO_NAMES)
def test_full_range_api(name: str) -> None:
    buf = [5, 3, 8, 1, 9, 2, 7, 4, 6]
    ALGORITHMS[name](buf, 0, len(buf))
    assert buf == [1, 2, 3, 4, 5, 6, 7, 8, 9]


@pytest.mark.parametrize("name", ALGO_NAMES)
@pytest.mark.parametrize("first,last", [(-1, 3), (0, 10), (4, 2)])
def test_bad_range_fails_before_touching_buffer(name: str, first: int, last: int) -> None:
    buf = [3, 1, 2, 9, 0]
    before = list(buf)
    rec = RecordingObserver()
    with pytest.raises(IndexOutOfRangeError):
        ALGORITHMS[name](buf, first, last, observer=rec)
    assert_no_mutation(before, buf)
    assert rec.events == []


@pytest.mark.parametrize("name", ALGO_NAMES)
def test_bad_range_is_an_index_error(name: str) -> None:
    with pytest.raises(IndexError):
        ALGORITHMS[name]([1, 2, 3], 0, 4)


@pytest.mark.parametrize("name", ALGO_NAMES)
@pytest.mark.parametrize("a", [[], [42]])
def test_trivial_inputs_emit_no_events(name: str, a: List[int]) -> None:
    rec = RecordingObserver()
    buf = list(a)
    ALGORITHMS[name](buf, observer=rec)
    assert buf == a
    assert rec.events == []


@pytest.mark.parametrize("name", ALGO_NAMES)
def test_empty_and_single_ranges_are_noops(name: str) -> None:
    rec = RecordingObserver()
    buf = [3, 1, 2]
    ALGORITHMS[name](buf, 1, 1, observer=rec)
    ALGORITHMS[name](buf, 1, 2, observer=rec)
    assert buf == [3, 1, 2]
    assert rec.count("compare") == 0


@pytest.mark.parametrize("name", ALGO_NAMES)
def test_numpy_and_array_buffers(name: str) -> None:
    data = [9, -4, 7, 7, 0, 3, -8, 12, 5, 1] * 5
    np_buf = np.array(data, dtype=np.int64)
    ALGORITHMS[name](np_buf)
    assert np_buf.tolist() == sorted(data)

    arr_buf = array.array("i", data)
    ALGORITHMS[name](arr_buf)
    assert arr_buf.tolist() == sorted(data)


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@pytest.mark.parametrize("name", ALGO_NAMES)
@settings(deadline=None, max_examples=60)
@given(a=st.lists(small_ints, min_size=0, max_size=300))
def test_property_random_small_range(name: str, a: List[int]) -> None:
    _check_one(name, a)


@pytest.mark.parametrize("name", ALGO_NAMES)
@settings(deadline=None, max_examples=40)
@given(a=st.lists(st.integers(min_value=0, max_value=7), min_size=0, max_size=300))
def test_property_many_duplicates(name: str, a: List[int]) -> None:
    _check_one(name, a)


@pytest.mark.parametrize("name", ALGO_NAMES)
@settings(deadline=None, max_examples=40)
@given(data=st.data())
def test_property_subrange(name: str, data: st.DataObject) -> None:
    a = data.draw(st.lists(small_ints, min_size=0, max_size=120))
    first = data.draw(st.integers(min_value=0, max_value=len(a)))
    last = data.draw(st.integers(min_value=first, max_value=len(a)))

    buf = list(a)
    ALGORITHMS[name](buf, first, last)

    assert buf[:first] == a[:first]
    assert buf[last:] == a[last:]
    assert buf[first:last] == sorted(a[first:last])
