"""
Measurement harness for the in-place sorting algorithms.

Each sample copies the input outside the timed block, then calls
`algo_fn(copy, observer=stats, **config)` exactly once under a monotonic
high-resolution clock. The observer counts comparisons, swaps, index reads and
index writes; every output is checked against the oracle.

Public API (stable):
    measure_sort_call(...) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "counts": dict[str, int] | None,    # compares/swaps/index_reads/index_writes of one call
        "status": "ok" | "timeout" | "error" | "invalid",
        "error": str | None,
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }

Counts come from the first sample. The algorithms are deterministic, so every
repeat produces the same counts; instrumentation overhead is included in the
timings.
"""

from __future__ import annotations

import gc
import time
from typing import Any, Callable, Dict, List, Optional

from ..observers import StatisticsObserver
from ..validate import equals_oracle, first_nondecreasing_violation_index

__all__ = ["measure_sort_call"]


def measure_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., None],
    a: List[Any],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time and count repeated in-place sorts of copies of `a`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for records).
    algo_fn : Callable[..., None]
        sort(buffer, first=0, last=None, observer=None, **options)
    a : list
        Input; never handed to the algorithm directly.
    config : dict | None
        Keyword options forwarded unchanged to `algo_fn`.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed, unobserved call first.
    disable_gc : bool
        If True, collect and disable GC during the timed loop; restore afterward.
    timeout_seconds : float
        If one call exceeds this, status becomes "timeout" and sampling stops.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")
    options = dict(config or {})

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],
        "counts": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    if warmup and repeats > 0:
        try:
            algo_fn(list(a), **options)
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            stats = StatisticsObserver()
            try:
                t0 = time.perf_counter_ns()
                algo_fn(arg, observer=stats, **options)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            if not equals_oracle(a, arg):
                i = first_nondecreasing_violation_index(arg)
                result["status"] = "invalid"
                result["error"] = f"output differs from oracle (first order violation at {i})"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))
            if result["counts"] is None:
                result["counts"] = stats.snapshot()

            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # If GC was previously disabled, leave it disabled (respect caller's global state).
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
