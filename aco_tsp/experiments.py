from __future__ import annotations
import itertools, statistics, os
from typing import Dict, Any, List, Optional
from dataclasses import asdict, replace
import csv
from .tsp import TSPInstance
from .config import ACOConfig
from .colony import Colony


def run_repeated_trials(instance: TSPInstance, cfg: ACOConfig, n_cycles: int = 50, n_runs: int = 10,
                        base_seed: int = 42, steps_per_call: Optional[int] = None):
    lengths = []
    times = []
    best_tours = []
    stalls = 0
    for r in range(n_runs):
        cfg_r = replace(cfg, seed=base_seed + r)
        res = Colony(instance, cfg_r).run(n_cycles, steps_per_call=steps_per_call)
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        best_tours.append(res.best_tour)
        stalls += res.stalled
    stats = {
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "median_length": statistics.median(lengths),
        "mean_time": statistics.mean(times),
        "n_runs": n_runs,
        "n_stalled": stalls,
    }
    return stats, list(zip(lengths, times, best_tours))


def run_parameter_sweep(instance: TSPInstance, param_grid: Dict[str, List[Any]],
                        base_cfg: Optional[ACOConfig] = None, n_cycles: int = 30, n_runs: int = 5,
                        base_seed: int = 100, csv_path: Optional[str] = None):
    base_cfg = base_cfg or ACOConfig()
    fields = asdict(base_cfg)
    unknown = [k for k in param_grid if k not in fields]
    if unknown:
        raise ValueError(f"Unknown ACOConfig fields in grid: {unknown}")
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        cfg = replace(base_cfg, **dict(zip(keys, values)))
        stats, _ = run_repeated_trials(instance, cfg, n_cycles=n_cycles, n_runs=n_runs, base_seed=base_seed)
        row = {**{k: getattr(cfg, k) for k in keys}, **stats}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
