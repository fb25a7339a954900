"""Tests for configuration and the experiment helpers."""

import csv

import pytest

from aco_tsp import ACOConfig, TSPInstance
from aco_tsp.experiments import run_parameter_sweep, run_repeated_trials


class TestACOConfig:
    """Defaults and validation."""

    def test_defaults(self):
        cfg = ACOConfig()
        assert (cfg.alpha, cfg.beta, cfg.rho, cfg.Q) == (1.0, 5.0, 0.3, 100.0)
        assert cfg.n_ants is None
        assert cfg.stall_policy == "yield"

    @pytest.mark.parametrize("kwargs", [
        {"rho": -0.1},
        {"rho": 1.5},
        {"Q": 0.0},
        {"eps": -1.0},
        {"n_ants": 0},
        {"stall_policy": "retry"},
    ])
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ACOConfig(**kwargs)


class TestExperiments:
    """Repeated trials and grid sweeps."""

    def test_repeated_trials(self):
        inst = TSPInstance.random_euclidean(6, seed=3)
        stats, details = run_repeated_trials(inst, ACOConfig(n_ants=8), n_cycles=3, n_runs=3, base_seed=10)
        assert stats["n_runs"] == 3
        assert stats["n_stalled"] == 0
        assert stats["min_length"] <= stats["median_length"] <= stats["max_length"]
        assert len(details) == 3
        for L, t, tour in details:
            assert sorted(tour) == list(range(6))
            assert L == pytest.approx(inst.tour_length(tour))

    def test_repeated_trials_are_seeded(self):
        inst = TSPInstance.random_euclidean(6, seed=3)
        a, _ = run_repeated_trials(inst, ACOConfig(n_ants=8), n_cycles=2, n_runs=2, base_seed=1)
        b, _ = run_repeated_trials(inst, ACOConfig(n_ants=8), n_cycles=2, n_runs=2, base_seed=1)
        assert a["mean_length"] == b["mean_length"]

    def test_parameter_sweep_writes_csv(self, tmp_path):
        inst = TSPInstance.random_euclidean(5, seed=4)
        path = tmp_path / "grid.csv"
        rows = run_parameter_sweep(inst, {"beta": [1.0, 5.0], "rho": [0.2]}, base_cfg=ACOConfig(n_ants=5),
                                   n_cycles=2, n_runs=2, csv_path=str(path))
        assert [(r["beta"], r["rho"]) for r in rows] == [(1.0, 0.2), (5.0, 0.2)]
        with open(path, newline="") as f:
            written = list(csv.DictReader(f))
        assert len(written) == 2
        assert float(written[1]["beta"]) == 5.0

    def test_parameter_sweep_rejects_unknown_field(self):
        inst = TSPInstance.random_euclidean(4, seed=4)
        with pytest.raises(ValueError, match="Unknown"):
            run_parameter_sweep(inst, {"gamma": [1.0]})
