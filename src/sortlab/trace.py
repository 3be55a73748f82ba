"""
Engine trace: what the hybrid algorithms decided, not what they touched.

Observers see element accesses; an `EngineTrace` sees state-machine
transitions (partition, insertion delegation, heap fallback, drop/merge early
fallback). Pass one to `intro_sort(..., trace=t)` or `drop_merge_sort(...,
trace=t)` to check the depth-budget and disorder-fallback guarantees.

In drop/merge the top-level engine fields describe only the whole-range
fallback sort (all zero when the adaptive path completes); the side-buffer
sort records into its own trace, `side`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["EngineTrace"]


@dataclass
class EngineTrace:
    partitions: int = 0
    insertion_sorts: int = 0
    heap_fallbacks: int = 0
    depth_budget: int = 0          # budget granted at the top-level call
    max_depth_used: int = 0        # largest number of budget units consumed on any path
    max_recursion: int = 0         # deepest nested call (loop iterations excluded)
    dropped: int = 0               # drop/merge: elements sent to the side buffer
    early_fallback: bool = False   # drop/merge: abandoned for the hybrid engine
    side: Optional[EngineTrace] = None  # drop/merge: trace of the side-buffer sort

    def record_depth(self, remaining: int, level: int) -> None:
        used = self.depth_budget - remaining
        if used > self.max_depth_used:
            self.max_depth_used = used
        if level > self.max_recursion:
            self.max_recursion = level
