from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Tuple, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class City:
    x: float
    y: float
    id: int = 0
    name: Optional[str] = None

    def label(self) -> str:
        return self.name if self.name is not None else f"City {self.id}"


def as_cities(points) -> List[City]:
    """Normalize (x, y) pairs, mappings or City objects into Cities numbered by position."""
    cities = []
    for idx, p in enumerate(points):
        if isinstance(p, City):
            cities.append(City(float(p.x), float(p.y), idx, p.name))
        elif isinstance(p, dict):
            cities.append(City(float(p["x"]), float(p["y"]), idx, p.get("name")))
        else:
            x, y = p[0], p[1]
            cities.append(City(float(x), float(y), idx))
    return cities


class DistanceMatrix:
    """Read-only table of pairwise Euclidean distances."""

    def __init__(self, cities: Sequence[City]):
        coords = np.array([(c.x, c.y) for c in cities], dtype=float).reshape(-1, 2)
        diff = coords[:, None, :] - coords[None, :, :]
        D = np.hypot(diff[..., 0], diff[..., 1])
        D.setflags(write=False)
        self.D = D
        self.n = len(coords)

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, ij: Tuple[int, int]) -> float:
        i, j = ij
        return float(self.D[i, j])

    def distance(self, i: int, j: int) -> float:
        return float(self.D[i, j])

    def route_distance(self, route: Sequence[int]) -> float:
        n = len(route)
        if n < 2:
            return 0.0
        r = np.asarray(route, dtype=int)
        return float(self.D[r, np.roll(r, -1)].sum())


def route_distance(cities, route: Sequence[int]) -> float:
    """Total cyclic length of `route` over `cities`, closing edge included."""
    return DistanceMatrix(as_cities(cities)).route_distance(route)


@dataclass
class TSPInstance:
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def circle(n: int, radius: float = 50.0, name: str = "circle"):
        coords = [(radius * math.cos(2 * math.pi * k / n), radius * math.sin(2 * math.pi * k / n)) for k in range(n)]
        return TSPInstance(coords=coords, name=name)

    def n_cities(self) -> int:
        return len(self.coords)

    def cities(self) -> List[City]:
        return as_cities(self.coords)

    def distance_matrix(self) -> DistanceMatrix:
        return DistanceMatrix(self.cities())

    def tour_length(self, tour: List[int]) -> float:
        return self.distance_matrix().route_distance(tour)
