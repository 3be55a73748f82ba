"""
sortlab: instrumented sorting core.

Quick use:

    from sortlab import intro_sort, StatisticsObserver

    stats = StatisticsObserver()
    data = [5, 3, 1, 4, 2]
    intro_sort(data, observer=stats)
    stats.compare_count

Subpackages:
    sortlab.algorithms  hybrid engine, dual-pivot, drop/merge, primitives
    sortlab.datasets    seeded input generators (incl. adversarial inputs)
    sortlab.validate    oracle and property checks
    sortlab.bench       measurement harness and YAML-driven runner
"""

from .algorithms import (
    ALGORITHMS,
    drop_merge_sort,
    dual_pivot_sort,
    heap_sort,
    insertion_sort,
    intro_sort,
    quick_sort,
)
from .errors import IndexOutOfRangeError, PoolError, SortLabError
from .observers import (
    NULL_OBSERVER,
    CallbackObserver,
    CompositeObserver,
    NullObserver,
    Observer,
    RecordingObserver,
    SortEvent,
    StatisticsObserver,
)
from .pool import DEFAULT_POOL, BufferPool
from .trace import EngineTrace
from .view import BUFFER_MAIN, BUFFER_SCRATCH, SortView, check_range

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "intro_sort",
    "dual_pivot_sort",
    "drop_merge_sort",
    "quick_sort",
    "heap_sort",
    "insertion_sort",
    "SortLabError",
    "IndexOutOfRangeError",
    "PoolError",
    "Observer",
    "NullObserver",
    "NULL_OBSERVER",
    "StatisticsObserver",
    "CallbackObserver",
    "RecordingObserver",
    "SortEvent",
    "CompositeObserver",
    "BufferPool",
    "DEFAULT_POOL",
    "EngineTrace",
    "SortView",
    "check_range",
    "BUFFER_MAIN",
    "BUFFER_SCRATCH",
]
