# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from tsp_solver import TSPInstance, SolverConfig, TwoOptHistory, nearest_neighbor, two_opt
from tsp_solver.experiments import run_repeated_trials, run_threshold_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details_by_size, save_path):
    plt.figure()
    sizes = list(details_by_size.keys())
    for i, n in enumerate(sizes, start=1):
        lengths = [L for (L, t, tour) in details_by_size[n]]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(sizes) + 1), [str(n) for n in sizes])
    plt.xlabel("Cities")
    plt.ylabel("Tour length")
    plt.title("Tour lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_two_opt_convergence(inst, save_path, start=0):
    dm = inst.distance_matrix()
    history = TwoOptHistory()
    two_opt(dm, nearest_neighbor(dm, start), history=history)
    plt.figure()
    plt.plot(history.lengths)
    plt.xlabel("Accepted 2-opt move")
    plt.ylabel("Tour length")
    plt.title(f"2-opt from nearest neighbor (n={inst.n_cities()}, {history.passes} passes)")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[8, 10, 20, 50])
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--exact-threshold", type=int, default=10)
    ap.add_argument("--exact-max-cities", type=int, default=15)
    ap.add_argument("--starts", type=int, default=5)
    ap.add_argument("--optimum", action="store_true", help="also report the gap to brute force (sizes <= 9 only)")
    ap.add_argument("--sweep", action="store_true", help="sweep exact_threshold and n_starts on a 12-city instance")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                        format="[%(asctime)s][%(name)s][%(levelname)s]: %(message)s",
                        datefmt="%Y-%m-%d %H:%M:%S")

    try:
        cfg = SolverConfig(exact_threshold=args.exact_threshold, exact_max_cities=args.exact_max_cities,
                           n_starts=args.starts)
    except ValueError as e:
        ap.error(str(e))

    # repeated trials per size
    records = []
    details_by_size = {}
    for n in args.sizes:
        stats, details = run_repeated_trials(n, cfg, n_runs=args.runs, square_size=args.square,
                                             with_optimum=args.optimum and n <= 9)
        print(n, json.dumps(stats, indent=2))
        records.append(stats)
        details_by_size[n] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = os.path.join(OUTDIR, "results_summary.csv")
    df_summary.to_csv(summary_csv, index=False)
    plot_scatter(details_by_size, os.path.join(OUTDIR, "results_distribution.png"))

    largest = max(args.sizes)
    inst = TSPInstance.random_euclidean(n=largest, seed=123, square_size=args.square, name=f"demo{largest}")
    plot_two_opt_convergence(inst, os.path.join(OUTDIR, f"two_opt_convergence_{largest}.png"))

    if args.sweep:
        grid = {"exact_threshold": [10, 12], "n_starts": [1, 3, 5]}
        rows = run_threshold_sweep(12, grid, base_cfg=cfg, n_runs=3, base_seed=500,
                                   csv_path=os.path.join(OUTDIR, "threshold_grid.csv"))
        print("Grid search evaluated:", len(rows))


if __name__ == "__main__":
    main()
