from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .tsp import DistanceMatrix

logger = logging.getLogger(__name__)


def reverse_segment(route: Sequence[int], i: int, j: int) -> List[int]:
    """New route with positions i..j (inclusive) reversed; `route` is left untouched."""
    route = list(route)
    return route[:i] + route[i:j + 1][::-1] + route[j + 1:]


@dataclass
class TwoOptHistory:
    # one entry per accepted move, plus the starting tour at index 0
    tours: List[List[int]] = field(default_factory=list)
    lengths: List[float] = field(default_factory=list)
    passes: int = 0

    def record(self, tour: List[int], length: float):
        self.tours.append(list(tour))
        self.lengths.append(length)


def two_opt(dm: DistanceMatrix, route: Sequence[int], min_improvement: float = 0.0,
            max_passes: Optional[int] = None, history: Optional[TwoOptHistory] = None) -> List[int]:
    """
    First-improvement 2-opt.

    Scans (i, j) with 1 <= i <= n-3 and i+2 <= j <= n-1. Each candidate is the
    current best tour with positions i..j reversed; it replaces the best tour
    as soon as its length is lower by more than `min_improvement`, and the scan
    carries on from the replaced tour. Stops after a full pass without an
    accepted move (or after `max_passes`). The returned length never exceeds
    the input length.
    """
    n = len(route)
    best = list(route)
    best_length = dm.route_distance(best)
    if history is not None:
        history.record(best, best_length)

    passes = 0
    improved = True
    while improved:
        if max_passes is not None and passes >= max_passes:
            break
        improved = False
        passes += 1
        for i in range(1, n - 2):
            for j in range(i + 2, n):
                candidate = reverse_segment(best, i, j)
                length = dm.route_distance(candidate)
                if length < best_length - min_improvement:
                    best, best_length = candidate, length
                    improved = True
                    if history is not None:
                        history.record(best, best_length)

    if history is not None:
        history.passes = passes
    logger.debug("2-opt: n=%d passes=%d length=%.6f", n, passes, best_length)
    return best
