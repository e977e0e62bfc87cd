from __future__ import annotations
import itertools, statistics, math, os
from typing import Dict, Any, List, Tuple, Optional
from dataclasses import asdict
import csv
from .tsp import TSPInstance, DistanceMatrix
from .solver_base import SolverConfig
from .solver import TSPSolver


def brute_force(dm: DistanceMatrix) -> Tuple[List[int], float]:
    """Exhaustive optimum with city 0 fixed first. Only sensible for n <= 9 or so."""
    n = len(dm)
    if n < 2:
        return list(range(n)), 0.0
    best_tour, best_length = None, math.inf
    for perm in itertools.permutations(range(1, n)):
        tour = [0, *perm]
        L = dm.route_distance(tour)
        if L < best_length:
            best_tour, best_length = tour, L
    return best_tour, best_length


def append_csv_row(csv_path: str, row: Dict[str, Any]):
    """Append one stats row, writing the header first if the file is new or empty."""
    write_header = not os.path.exists(csv_path) or os.path.getsize(csv_path) == 0
    with open(csv_path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(row.keys()))
        if write_header:
            w.writeheader()
        w.writerow(row)


def run_repeated_trials(n_cities: int, cfg: SolverConfig, n_runs: int = 10, base_seed: int = 42,
                        square_size: float = 100.0, with_optimum: bool = False):
    """Solve `n_runs` random instances of size `n_cities` (seeds base_seed, base_seed+1, ...)."""
    lengths = []
    times = []
    gaps = []
    details = []
    methods = set()
    for r in range(n_runs):
        inst = TSPInstance.random_euclidean(n_cities, seed=base_seed + r, square_size=square_size,
                                            name=f"rand{n_cities}_{base_seed + r}")
        res = TSPSolver(inst.coords, cfg).solve()
        lengths.append(res.total_distance)
        times.append(res.elapsed_sec)
        methods.add(res.method)
        if with_optimum:
            _, opt = brute_force(inst.distance_matrix())
            gaps.append((res.total_distance - opt) / opt if opt > 0 else 0.0)
        details.append((res.total_distance, res.elapsed_sec, res.route))
    stats = {
        "n_cities": n_cities,
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "median_length": statistics.median(lengths),
        "mean_time": statistics.mean(times),
        "method": ",".join(sorted(methods)),
        "n_runs": n_runs,
    }
    if with_optimum:
        stats["mean_gap"] = statistics.mean(gaps)
        stats["max_gap"] = max(gaps)
    return stats, details


def run_threshold_sweep(n_cities: int, param_grid: Dict[str, List[Any]],
                        base_cfg: Optional[SolverConfig] = None, n_runs: int = 5, base_seed: int = 100,
                        csv_path: Optional[str] = None):
    """Grid over SolverConfig fields (e.g. exact_threshold, n_starts); one stats row per combination."""
    base_cfg = base_cfg or SolverConfig()
    keys = sorted(param_grid.keys())
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        cfg = SolverConfig(**{**asdict(base_cfg), **dict(zip(keys, values))})
        stats, _ = run_repeated_trials(n_cities, cfg, n_runs=n_runs, base_seed=base_seed)
        row = {**{k: getattr(cfg, k) for k in keys}, **stats}
        rows.append(row)
        if csv_path is not None:
            append_csv_row(csv_path, row)
    return rows
