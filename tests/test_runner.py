"""
Measurement harness and YAML-driven runner.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
import yaml
from rich.console import Console

from sortlab import intro_sort
from sortlab.bench import measure_sort_call, run_experiment
from sortlab.bench.runner import COUNT_COLUMNS, load_config, main


def _config(**overrides):
    cfg = {
        "experiment_name": "smoke",
        "seed": 11,
        "repeats": 2,
        "warmup": True,
        "disable_gc": True,
        "timeout_seconds": 30.0,
        "dataset": {"dist": "outliers", "params": {"frac": 0.05}},
        "sizes": [50, 200],
        "algorithms": [
            {"name": "introsort"},
            {"name": "drop_merge"},
            {"name": "quicksort", "config": {"pivot": "median9"}},
        ],
    }
    cfg.update(overrides)
    return cfg


def _quiet() -> Console:
    return Console(file=io.StringIO(), width=120)


def test_run_experiment_from_mapping() -> None:
    result = run_experiment(_config(), console=_quiet(), show_progress=False)

    assert result.name == "smoke"
    assert result.statuses == []
    assert len(result.samples) == 3 * 2 * 2
    assert len(result.summary) == 3 * 2
    assert set(result.summary["algo"]) == {"introsort", "drop_merge", "quicksort"}
    assert (result.summary["samples_ok"] == 2).all()
    assert (result.summary["compares"] > 0).all()
    for col in COUNT_COLUMNS:
        assert col in result.summary.columns
    assert result.meta["machine"]["cores_logical"] >= 1


def test_counts_are_deterministic_per_seed() -> None:
    a = run_experiment(_config(), console=_quiet(), show_progress=False)
    b = run_experiment(_config(), console=_quiet(), show_progress=False)
    assert a.summary[COUNT_COLUMNS].equals(b.summary[COUNT_COLUMNS])


def test_run_experiment_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "exp.yaml"
    path.write_text(yaml.safe_dump(_config(sizes=[32])), encoding="utf-8")
    assert load_config(path)["experiment_name"] == "smoke"

    result = run_experiment(path, console=_quiet(), show_progress=False)
    assert len(result.summary) == 3


def test_missing_keys_and_bad_algorithms() -> None:
    cfg = _config()
    del cfg["seed"]
    with pytest.raises(ValueError, match="seed"):
        run_experiment(cfg, console=_quiet(), show_progress=False)

    with pytest.raises(ImportError):
        run_experiment(_config(algorithms=[{"name": "bogosort"}]), console=_quiet(), show_progress=False)
    with pytest.raises(ValueError, match="Duplicate"):
        run_experiment(
            _config(algorithms=[{"name": "introsort"}, {"name": "introsort"}]),
            console=_quiet(),
            show_progress=False,
        )


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_main_cli(tmp_path: Path) -> None:
    path = tmp_path / "exp.yaml"
    path.write_text(yaml.safe_dump(_config(sizes=[16], repeats=1)), encoding="utf-8")
    main([str(path)])
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.yaml")])


# ------------------------- measure_sort_call ------------------------- #

def _measure(fn, a, **kw):
    params = dict(
        algo_name="x", algo_fn=fn, a=a, config=None,
        repeats=3, warmup=False, disable_gc=False, timeout_seconds=30.0,
    )
    params.update(kw)
    return measure_sort_call(**params)


def test_measure_ok_and_input_untouched() -> None:
    a = [5, 3, 1, 4, 2]
    res = _measure(intro_sort, a)
    assert res["status"] == "ok"
    assert len(res["samples_ns"]) == 3
    assert res["counts"]["compares"] > 0
    assert a == [5, 3, 1, 4, 2]


def test_measure_invalid_error_and_timeout() -> None:
    def noop(buf, first=0, last=None, observer=None):
        pass

    def boom(buf, first=0, last=None, observer=None):
        raise RuntimeError("boom")

    assert _measure(noop, [2, 1])["status"] == "invalid"

    res = _measure(boom, [2, 1])
    assert res["status"] == "error" and "boom" in res["error"]
    assert _measure(boom, [2, 1], warmup=True)["error"].startswith("warmup failed")

    res = _measure(intro_sort, list(range(500, 0, -1)), timeout_seconds=1e-9)
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0


def test_measure_argument_checks() -> None:
    with pytest.raises(ValueError):
        _measure(intro_sort, [1], repeats=-1)
    with pytest.raises(ValueError):
        _measure(intro_sort, [1], timeout_seconds=0)
    assert _measure(intro_sort, [1], repeats=0)["counts"] is None
