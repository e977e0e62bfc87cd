from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tsp import City, DistanceMatrix

# n * 2^n float64 cost cells plus int16 parents: about 210 MB at n = 20
HARD_MAX_CITIES = 20


class CapacityExceededError(ValueError):
    """Raised by the exact solver when an instance is above its size ceiling."""

    def __init__(self, n: int, max_cities: int):
        super().__init__(f"Held-Karp supports at most {max_cities} cities, got {n}")
        self.n = n
        self.max_cities = max_cities


class InvalidInputError(ValueError):
    """Malformed cities or route handed in from outside the engine."""


@dataclass
class SolverConfig:
    exact_threshold: int = 10        # largest n routed to Held-Karp by the solver
    exact_max_cities: int = 15       # Held-Karp refuses anything above this
    n_starts: int = 5                # nearest-neighbor start cities for the multi-start regime
    min_improvement: float = 0.0     # 2-opt accepts a move only if it gains more than this
    max_passes: Optional[int] = None # cap on 2-opt passes; None runs to a local optimum

    def __post_init__(self):
        if self.exact_threshold < 0:
            raise ValueError("exact_threshold must be >= 0.")
        if self.exact_max_cities < 1:
            raise ValueError("exact_max_cities must be >= 1.")
        if self.exact_max_cities > HARD_MAX_CITIES:
            raise ValueError(f"exact_max_cities must be <= {HARD_MAX_CITIES}.")
        if self.n_starts < 1:
            raise ValueError("n_starts must be >= 1.")
        if self.min_improvement < 0:
            raise ValueError("min_improvement must be >= 0.")
        if self.max_passes is not None and self.max_passes < 1:
            raise ValueError("max_passes must be >= 1 or None.")


METHOD_LABELS = {
    "trivial": "Trivial (fewer than 2 cities)",
    "held_karp": "Dynamic Programming (optimal)",
    "nn_2opt_fallback": "Nearest Neighbor + 2-opt (heuristic, exact solver declined)",
    "nn_2opt_multistart": "Nearest Neighbor + 2-opt (heuristic)",
}


@dataclass
class TSPResult:
    route: List[int]
    total_distance: float
    cities: List[City]
    method: str
    elapsed_sec: float = 0.0
    start_lengths: List[float] = field(default_factory=list)

    @property
    def route_names(self) -> List[str]:
        return [self.cities[i].label() for i in self.route]

    def legs(self) -> List[Tuple[int, int, float]]:
        """(from, to, length) for every edge of the closed tour."""
        n = len(self.route)
        if n < 2:
            return []
        dm = DistanceMatrix(self.cities)
        return [(a, b, dm.distance(a, b)) for a, b in zip(self.route, self.route[1:] + self.route[:1])]

    def summary(self, named: bool = False) -> str:
        if not self.route:
            return "TSP Solution:\nNo cities."
        stops = self.route_names if named else [str(i) for i in self.route]
        lines = [
            "TSP Solution with Named Cities:" if named else "TSP Solution:",
            f"Number of cities: {len(self.cities)}",
            f"Route: {' -> '.join(stops)} -> {stops[0]}",
            f"Total distance: {self.total_distance:.2f} units",
            "",
            "Route Details:",
        ]
        for pos, idx in enumerate(self.route, start=1):
            c = self.cities[idx]
            who = c.label() if named else f"City {idx}"
            lines.append(f"{pos}. {who}: ({c.x!r}, {c.y!r})")
        lines.append("")
        lines.append(f"Algorithm: {METHOD_LABELS.get(self.method, self.method)}")
        return "\n".join(lines)
