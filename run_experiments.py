# run_experiments.py
import os, json, argparse, logging
from dataclasses import replace
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from aco_tsp import TSPInstance, ACOConfig, Colony
from aco_tsp.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def build_config(args, **overrides):
    cfg = ACOConfig(alpha=args.alpha, beta=args.beta, rho=args.rho, Q=args.Q,
                    n_ants=args.ants, stall_policy=args.stall_policy)
    return replace(cfg, **overrides)


def plot_scatter(details_by_label, save_path):
    plt.figure()
    labels = list(details_by_label.keys())
    for i, label in enumerate(labels, start=1):
        lengths = [L for (L, t, tour) in details_by_label[label]]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(labels) + 1), labels)
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(inst, label, cfg, n_cycles, save_path):
    colony = Colony(inst, cfg)
    colony.run(n_cycles)
    plt.figure()
    plt.plot(range(1, len(colony.history_best_lengths) + 1), colony.history_best_lengths)
    plt.xlabel("Cycle")
    plt.ylabel("Best-so-far tour length")
    plt.title(f"{label} convergence")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", default=None, help="x,y city file (overrides --n)")
    ap.add_argument("--n", type=int, default=20)
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--cycles", type=int, default=30)
    ap.add_argument("--ants", type=int, default=None, help="colony size (default max(20, 20n))")
    ap.add_argument("--alpha", type=float, default=1.0)
    ap.add_argument("--beta", type=float, default=5.0)
    ap.add_argument("--rho", type=float, default=0.3)
    ap.add_argument("--Q", type=float, default=100.0)
    ap.add_argument("--stall-policy", choices=["yield", "uniform"], default="yield")
    ap.add_argument("--sweep", action="store_true", help="also run an alpha/beta/rho grid")
    ap.add_argument("--outdir", default=OUTDIR)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.csv:
        inst = TSPInstance.from_csv(args.csv)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=123, width=args.square, name=f"demo{args.n}")

    # evaporation rates to compare; the chosen --rho is always included
    rhos = sorted({0.1, args.rho, 0.5})
    configs = [(f"rho={rho:g}", build_config(args, rho=rho)) for rho in rhos]

    # repeated trials
    records = []
    details_by_label = {}
    for label, cfg in configs:
        stats, details = run_repeated_trials(inst, cfg, n_cycles=args.cycles, n_runs=args.runs)
        print(label, json.dumps(stats, indent=2))
        records.append({"config": label, **stats})
        details_by_label[label] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = ensure(os.path.join(args.outdir, "results_summary.csv"))
    df_summary.to_csv(summary_csv, index=False)
    plot_scatter(details_by_label, os.path.join(args.outdir, "results_distribution.png"))

    # convergence plots (per config)
    for label, cfg in configs:
        conv_png = os.path.join(args.outdir, f"convergence_{label.replace('=', '_')}.png")
        plot_convergence(inst, label, replace(cfg, seed=7), args.cycles, conv_png)

    if args.sweep:
        grid = {"alpha": [0.5, 1.0, 2.0], "beta": [2.0, 5.0], "rho": [0.1, 0.3, 0.5]}
        rows = run_parameter_sweep(
            inst, grid, base_cfg=build_config(args),
            n_cycles=args.cycles, n_runs=3, base_seed=500,
            csv_path=os.path.join(args.outdir, "aco_grid.csv")
        )
        print("Grid search evaluated:", len(rows))


if __name__ == "__main__":
    main()
