from __future__ import annotations
import logging
import math
import time
from typing import List, Optional

from .tsp import City, DistanceMatrix, as_cities
from .solver_base import SolverConfig, TSPResult, CapacityExceededError
from .held_karp import held_karp
from .nearest_neighbor import nearest_neighbor
from .two_opt import two_opt
from .validation import parse_cities

logger = logging.getLogger(__name__)


class TSPSolver:
    """
    Picks a strategy by instance size:

    - fewer than 2 cities: trivial tour
    - up to cfg.exact_threshold cities: Held-Karp, falling back to a single
      nearest-neighbor + 2-opt run from city 0 if Held-Karp declines
    - otherwise: nearest-neighbor + 2-opt from the first cfg.n_starts cities,
      keeping the shortest (first one wins on ties)
    """
    def __init__(self, cities, cfg: Optional[SolverConfig] = None):
        self.cities: List[City] = as_cities(cities)
        self.cfg = cfg or SolverConfig()
        self.dm = DistanceMatrix(self.cities)
        self.n = len(self.cities)

    def route_distance(self, route) -> float:
        return self.dm.route_distance(route)

    def _improve(self, start: int) -> List[int]:
        tour = nearest_neighbor(self.dm, start)
        return two_opt(self.dm, tour, min_improvement=self.cfg.min_improvement,
                       max_passes=self.cfg.max_passes)

    def _multi_start(self):
        best_route: List[int] = []
        best_length = math.inf
        lengths = []
        for start in range(min(self.n, self.cfg.n_starts)):
            route = self._improve(start)
            L = self.dm.route_distance(route)
            lengths.append(L)
            logger.debug("start %d -> length %.6f", start, L)
            if L < best_length:
                best_route, best_length = route, L
        return best_route, lengths

    def solve(self) -> TSPResult:
        t0 = time.time()
        n = self.n
        lengths: List[float] = []

        if n < 2:
            route, method = list(range(n)), "trivial"
        elif n <= self.cfg.exact_threshold:
            try:
                route, _ = held_karp(self.dm, max_cities=self.cfg.exact_max_cities)
                method = "held_karp"
            except CapacityExceededError as e:
                logger.warning("%s; falling back to nearest neighbor + 2-opt", e)
                route, method = self._improve(0), "nn_2opt_fallback"
        else:
            route, lengths = self._multi_start()
            method = "nn_2opt_multistart"

        total = self.dm.route_distance(route)
        elapsed = time.time() - t0
        logger.info("solved n=%d with %s: length=%.4f in %.3fs", n, method, total, elapsed)
        return TSPResult(route=route, total_distance=total, cities=self.cities,
                         method=method, elapsed_sec=elapsed, start_lengths=lengths)


def solve(cities, cfg: Optional[SolverConfig] = None) -> TSPResult:
    return TSPSolver(cities, cfg).solve()


def solve_with_names(cities, cfg: Optional[SolverConfig] = None) -> TSPResult:
    """Like solve(), for cities given as mappings with 'name', 'x' and 'y'.

    The names travel on the result's cities, so `result.route_names` and
    `result.summary(named=True)` read in city names.
    """
    return TSPSolver(parse_cities(cities, require_names=True), cfg).solve()
