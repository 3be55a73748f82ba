"""
Experiment runner: sweeps sizes x algorithms from a YAML config and reports
time and operation counts.

Usage (from repo root):
    python -m sortlab.bench.runner experiments/configs/hybrid_counts.yaml
    sortlab-bench experiments/configs/hybrid_counts.yaml --verbose

Config keys (all required):
    experiment_name, seed, repeats, warmup, disable_gc, timeout_seconds,
    dataset: {dist, params}, sizes: [int, ...],
    algorithms: [{name, config}, ...]   # name = module in sortlab.algorithms

Nothing is written to disk: `run_experiment` returns the per-sample records
and a summary DataFrame (median + IQR time, and the four operation counts per
(algo, n)), and the CLI prints the summary as a rich table.

Design notes:
- For each size n, ONE dataset is generated and every algorithm gets a copy.
- On timeout/error/invalid output at size n, larger sizes are skipped for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from ..datasets import make_dataset
from .measure import measure_sort_call

__all__ = ["AlgoSpec", "ExperimentResult", "load_config", "run_experiment", "main"]

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]
COUNT_COLUMNS = ["compares", "swaps", "index_reads", "index_writes"]
SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"] + COUNT_COLUMNS


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Any
    config: Dict[str, Any]


@dataclass
class ExperimentResult:
    name: str
    samples: pd.DataFrame
    summary: pd.DataFrame
    statuses: List[Dict[str, Any]] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


# ------------------------- helpers: config & meta ------------------------- #

def load_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"sortlab.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'sortlab.algorithms.{name}': {e!r}") from e

        if not hasattr(mod, "sort"):
            raise AttributeError(
                f"Algorithm module '{name}' must define `sort(buffer, first=0, last=None, observer=None)`"
            )

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=getattr(mod, "sort"), config=config))
    return specs


# ------------------------- aggregation & display ------------------------- #

def _iqr_ns(group: pd.DataFrame) -> int:
    q1 = group["time_ns"].quantile(0.25)
    q3 = group["time_ns"].quantile(0.75)
    return int(q3 - q1)


def _aggregate_summary(samples: pd.DataFrame) -> pd.DataFrame:
    if samples.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    agg = samples.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
        compares=("compares", "first"),
        swaps=("swaps", "first"),
        index_reads=("index_reads", "first"),
        index_writes=("index_writes", "first"),
    )
    iqr_vals = (
        samples.groupby(["algo", "n"])[["time_ns"]]
        .apply(_iqr_ns)
        .rename("iqr_ns")
        .reset_index()
    )
    out = agg.merge(iqr_vals, on=["algo", "n"], how="left")
    int_cols = ["median_ns", "min_ns", "max_ns", "iqr_ns"] + COUNT_COLUMNS
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int], console: Console) -> None:
    table = Table(title="Benchmark Summary (median ms ± IQR | compares)")
    table.add_column("Algorithm", style="bold")
    picks: List[Tuple[str, int]] = []
    if sizes:
        first, mid, last = sizes[0], sizes[len(sizes) // 2], sizes[-1]
        for n in dict.fromkeys([first, mid, last]):
            picks.append((f"n={n}", n))
            table.add_column(f"n={n}", justify="right")

    def _format_cell(row: pd.Series) -> str:
        median_ms = row["median_ns"] / 1e6
        iqr_ms = row["iqr_ns"] / 1e6
        return f"{median_ms:.2f} ± {iqr_ms:.2f} | {int(row['compares']):,}"

    for algo in summary["algo"].unique():
        cells = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            cells.append("—" if s.empty else _format_cell(s.iloc[0]))
        table.add_row(*cells)
    console.print()
    console.print(table)
    console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(
    config: Union[Path, Dict[str, Any]],
    *,
    console: Optional[Console] = None,
    show_progress: bool = True,
) -> ExperimentResult:
    """Run a sweep from a YAML path or an already-loaded config mapping."""
    cfg = load_config(config) if isinstance(config, Path) else dict(config)
    console = console or _console

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])

    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    algos = _resolve_algorithms(list(cfg["algorithms"]))
    meta = _gather_meta()

    # Seeded RNG, passed explicitly to the generators
    rng = np.random.default_rng(int(cfg["seed"]))
    per_algo_skip = {a.name: False for a in algos}
    records: List[Dict[str, Any]] = []
    statuses: List[Dict[str, Any]] = []

    console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")

    for n in tqdm(sizes, desc="Sizes", unit="n", disable=not show_progress):
        base_a = make_dataset(n, dataset_spec, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            res = measure_sort_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            counts = res["counts"] or {}
            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                records.append(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "trial": trial_idx,
                        "time_ns": int(t_ns),
                        **{k: counts.get(k, 0) for k in COUNT_COLUMNS},
                    }
                )

            status = res["status"]
            if status != "ok":
                per_algo_skip[a_spec.name] = True
                logger.warning("%s at n=%d: %s (%s); skipping larger sizes", a_spec.name, n, status, res["error"])
                statuses.append(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                    }
                )

    samples = pd.DataFrame.from_records(records, columns=["algo", "n", "trial", "time_ns"] + COUNT_COLUMNS)
    summary = _aggregate_summary(samples)
    _print_rich_summary(summary, sizes, console)

    return ExperimentResult(
        name=experiment_name,
        samples=samples,
        summary=summary,
        statuses=statuses,
        meta=meta,
    )


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("-v", "--verbose", action="store_true", help="Log engine decisions (DEBUG)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_console, show_path=False)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
