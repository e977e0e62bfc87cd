from __future__ import annotations
from typing import List

import numpy as np

from .tsp import DistanceMatrix


def nearest_neighbor(dm: DistanceMatrix, start: int = 0) -> List[int]:
    """Greedy tour: always move to the closest unvisited city. Ties go to the lower index."""
    n = len(dm)
    if n == 0:
        return []
    D = dm.D
    visited = np.zeros(n, dtype=bool)
    tour = [start]
    visited[start] = True
    current = start
    while len(tour) < n:
        row = np.where(visited, np.inf, D[current])
        # argmin returns the first minimum, i.e. the lowest index
        nxt = int(np.argmin(row))
        tour.append(nxt)
        visited[nxt] = True
        current = nxt
    return tour
