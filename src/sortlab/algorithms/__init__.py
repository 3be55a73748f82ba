"""
Algorithms public API.

Every module exposes the same entry point, so the runner can resolve an
algorithm by module name:

    sort(buffer, first=0, last=None, observer=None, **options) -> None

Re-exports:
    intro_sort, dual_pivot_sort, drop_merge_sort, quick_sort,
    heap_sort (range primitive), insertion_sort (range primitive)
    ALGORITHMS: name -> sort callable
"""

from .drop_merge import drop_merge_sort
from .dual_pivot import dual_pivot_sort
from .heapsort import heap_sort_range, sort as heap_sort
from .insertion import insertion_sort_range, sort as insertion_sort
from .introsort import intro_sort, intro_sort_range
from .quicksort import quick_sort

ALGORITHMS = {
    "introsort": intro_sort,
    "dual_pivot": dual_pivot_sort,
    "drop_merge": drop_merge_sort,
    "quicksort": quick_sort,
    "heapsort": heap_sort,
    "insertion": insertion_sort,
}

__all__ = [
    "ALGORITHMS",
    "intro_sort",
    "intro_sort_range",
    "dual_pivot_sort",
    "drop_merge_sort",
    "quick_sort",
    "heap_sort",
    "heap_sort_range",
    "insertion_sort",
    "insertion_sort_range",
]
