import random

import pytest

from tsp_solver import TSPInstance


UNIT_SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
COLLINEAR = [(0, 0), (1, 0), (2, 0)]


def is_permutation(route, n):
    return sorted(route) == list(range(n))


def random_tour(n, seed):
    tour = list(range(n))
    random.Random(seed).shuffle(tour)
    return tour


@pytest.fixture
def rand_instance():
    def make(n, seed=0):
        return TSPInstance.random_euclidean(n, seed=seed, name=f"t{n}_{seed}")
    return make
