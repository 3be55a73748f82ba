"""
Benchmark harness public API.

    from sortlab.bench import measure_sort_call, run_experiment
"""

from .measure import measure_sort_call
from .runner import ExperimentResult, run_experiment

__all__ = ["measure_sort_call", "run_experiment", "ExperimentResult"]
