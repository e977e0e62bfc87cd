from __future__ import annotations
import logging
from typing import List, Tuple

import numpy as np

from .tsp import DistanceMatrix
from .solver_base import CapacityExceededError, HARD_MAX_CITIES

logger = logging.getLogger(__name__)

DEFAULT_MAX_CITIES = 15


def held_karp(dm: DistanceMatrix, max_cities: int = DEFAULT_MAX_CITIES) -> Tuple[List[int], float]:
    """
    Optimal tour by the Held-Karp bitmask dynamic program, starting at city 0.

    cost[mask, u] is the length of the shortest path that leaves city 0, visits
    exactly the cities in `mask` and stops at u; parent[mask, u] is the city
    visited just before u on that path. Both tables are allocated only after
    the size check, since they hold n * 2^n entries.

    Returns (route, tour_length). Raises CapacityExceededError if the instance
    has more than `max_cities` cities, or more than HARD_MAX_CITIES whatever
    `max_cities` says.
    """
    n = len(dm)
    ceiling = min(max_cities, HARD_MAX_CITIES)
    if n > ceiling:
        raise CapacityExceededError(n, ceiling)
    if n == 0:
        return [], 0.0
    if n == 1:
        return [0], 0.0

    D = dm.D
    n_masks = 1 << n
    cost = np.full((n_masks, n), np.inf)
    parent = np.full((n_masks, n), -1, dtype=np.int16)
    cost[1, 0] = 0.0

    cities = np.arange(n)
    bits = np.left_shift(1, cities)

    for mask in range(1, n_masks):
        if not mask & 1:
            continue  # unreachable: every path starts at city 0
        outside = cities[(mask & bits) == 0]
        if outside.size == 0:
            continue
        new_masks = mask | bits[outside]
        row = cost[mask]
        for u in range(n):
            if not mask & (1 << u) or row[u] == np.inf:
                continue
            cand = row[u] + D[u, outside]
            better = cand < cost[new_masks, outside]
            if better.any():
                cost[new_masks[better], outside[better]] = cand[better]
                parent[new_masks[better], outside[better]] = u

    full = n_masks - 1
    closing = cost[full, 1:] + D[1:, 0]
    last = 1 + int(np.argmin(closing))
    best = float(closing[last - 1])

    route = []
    mask = full
    cur = last
    while cur != -1:
        route.append(cur)
        prev = int(parent[mask, cur])
        mask ^= 1 << cur
        cur = prev
    route.reverse()

    logger.debug("held-karp: n=%d states=%d length=%.6f", n, n_masks * n, best)
    return route, best
