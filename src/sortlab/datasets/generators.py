"""
Dataset generators for the sorting core.

Distributions:
- "random":        integers drawn uniformly from params["range"] (inclusive, required)
- "nearly_sorted": [0..n-1] followed by ceil(swap_frac * n) random index swaps
- "outliers":      [0..n-1] with ceil(frac * n) distinct positions overwritten by
                   random values in [0, n) (or params["range"])
- "few_uniques":   up to k distinct values, sampled with replacement
- "small_range":   like "random" but defaulting to [0, 255]
- "sorted":        [0, 1, ..., n-1]
- "reversed":      [n-1, ..., 0]
- "pipe_organ":    [0, 1, ..., n/2-1, n/2-1, ..., 1, 0] style mountain
- "anti_quicksort": McIlroy's adversary played against params["target"]
                   (an algorithm name, default "introsort"); the result is a
                   permutation of [0..n-1] that drives that algorithm's
                   median-of-three partitioning to its worst case

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- The caller owns and seeds the RNG; nothing here touches global random state.
- Deterministic distributions ignore `rng`.
- Returns a Python `list[int]` (algorithms stay NumPy-agnostic).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

from .adversary import mcilroy_permutation

SUPPORTED_DISTS = {
    "random",
    "nearly_sorted",
    "outliers",
    "few_uniques",
    "small_range",
    "sorted",
    "reversed",
    "pipe_organ",
    "anti_quicksort",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        {"dist": <one of SUPPORTED_DISTS>, "params": {...}}

        Examples:
            {"dist": "random", "params": {"range": [0, 1000]}}
            {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}
            {"dist": "outliers", "params": {"frac": 0.05}}
            {"dist": "few_uniques", "params": {"k": 10}}
            {"dist": "anti_quicksort", "params": {"target": "introsort"}}
    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params", None) or {}
    if n == 0:
        return []

    if dist == "random":
        lo, hi = _parse_inclusive_range(params)
        # Generator.integers is half-open; +1 makes the upper bound inclusive.
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "nearly_sorted":
        frac = _parse_frac(params, "swap_frac", default=0.05)
        arr = list(range(n))
        num_swaps = int(np.ceil(frac * n))
        if num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "outliers":
        frac = _parse_frac(params, "frac", default=0.05)
        lo, hi = _parse_optional_inclusive_range(params, default=(0, n - 1))
        arr = list(range(n))
        count = min(n, int(np.ceil(frac * n)))
        if count <= 0:
            return arr
        positions = rng.choice(n, size=count, replace=False)
        values = rng.integers(lo, hi + 1, size=count, dtype=np.int64)
        for p, v in zip(positions.tolist(), values.tolist()):
            arr[p] = v
        return arr

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_optional_inclusive_range(params, default=(0, 4294967295))
        actual_k = int(min(k, n, hi - lo + 1))
        # Draw distinct values from `rng` itself (not the random module) to stay reproducible.
        chosen: List[int] = []
        seen = set()
        while len(chosen) < actual_k:
            batch = rng.integers(lo, hi + 1, size=(actual_k - len(chosen)) * 2)
            for v in map(int, batch):
                if v not in seen:
                    seen.add(v)
                    chosen.append(v)
                    if len(chosen) == actual_k:
                        break
        idxs = rng.integers(0, actual_k, size=n)
        return [chosen[int(t)] for t in idxs]

    if dist == "small_range":
        lo, hi = _parse_small_range(params)
        if lo > hi:
            raise ValueError(f"small_range invalid: min > max ({lo} > {hi})")
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "pipe_organ":
        half = n // 2
        return list(range(half)) + [n - 1 - i for i in range(half, n)]

    if dist == "anti_quicksort":
        target = params.get("target", "introsort")
        if not isinstance(target, str):
            raise ValueError("anti_quicksort.params.target must be an algorithm name")
        return mcilroy_permutation(n, target)

    # Unreachable because of the check above; keep explicit for clarity.
    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_inclusive_range(params: Dict[str, Any]) -> Tuple[int, int]:
    """params["range"] == [min_int, max_int] (REQUIRED, both inclusive)."""
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    return _parse_optional_inclusive_range(params, default=(0, 0))


def _parse_optional_inclusive_range(
    params: Dict[str, Any], default: Tuple[int, int]
) -> Tuple[int, int]:
    """Parse params["range"] if present, else return `default`."""
    if "range" not in params:
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_frac(params: Dict[str, Any], key: str, default: float) -> float:
    val = params.get(key, default)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(f"params.{key} must be a float in [0.0, 1.0]; got {val!r}") from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"params.{key} must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return k


def _parse_small_range(params: Dict[str, Any]) -> Tuple[int, int]:
    """Either params["range"] or params["min_val"]/["max_val"] (defaults 0 and 255)."""
    if "range" in params:
        return _parse_optional_inclusive_range(params, default=(0, 255))
    min_raw = params.get("min_val", 0)
    max_raw = params.get("max_val", 255)
    if not _is_int_like(min_raw) or not _is_int_like(max_raw):
        raise ValueError("small_range params.min_val/max_val must be integers")
    return int(min_raw), int(max_raw)


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer))
