import pytest

from tsp_solver import DistanceMatrix, CapacityExceededError, HARD_MAX_CITIES, TSPInstance, held_karp, brute_force
from tsp_solver.tsp import as_cities

from conftest import UNIT_SQUARE, COLLINEAR, is_permutation


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6, 7, 8])
@pytest.mark.parametrize("seed", [0, 7])
def test_matches_brute_force(rand_instance, n, seed):
    dm = rand_instance(n, seed).distance_matrix()
    route, length = held_karp(dm)
    _, best = brute_force(dm)
    assert is_permutation(route, n)
    assert route[0] == 0
    assert length == pytest.approx(best)
    assert dm.route_distance(route) == pytest.approx(length)


def test_collinear_there_and_back():
    route, length = held_karp(DistanceMatrix(as_cities(COLLINEAR)))
    assert length == pytest.approx(4.0)
    assert route in ([0, 1, 2], [0, 2, 1])


def test_unit_square_follows_perimeter():
    route, length = held_karp(DistanceMatrix(as_cities(UNIT_SQUARE)))
    assert length == pytest.approx(4.0)
    assert route in ([0, 1, 2, 3], [0, 3, 2, 1])


def test_single_and_empty():
    assert held_karp(DistanceMatrix(as_cities([(1, 1)]))) == ([0], 0.0)
    assert held_karp(DistanceMatrix([])) == ([], 0.0)


def test_refuses_above_ceiling(rand_instance):
    dm = rand_instance(6).distance_matrix()
    with pytest.raises(CapacityExceededError) as exc:
        held_karp(dm, max_cities=5)
    assert exc.value.n == 6
    assert exc.value.max_cities == 5
    assert isinstance(exc.value, ValueError)


def test_runs_at_default_ceiling_size(rand_instance):
    dm = rand_instance(12, seed=3).distance_matrix()
    route, length = held_karp(dm)
    assert is_permutation(route, 12)
    assert dm.route_distance(route) == pytest.approx(length)


def test_hard_ceiling_wins_over_caller_limit():
    dm = TSPInstance.random_euclidean(40, seed=1).distance_matrix()
    with pytest.raises(CapacityExceededError) as exc:
        held_karp(dm, max_cities=40)
    assert exc.value.max_cities == HARD_MAX_CITIES


def test_hard_ceiling_just_above(rand_instance):
    dm = rand_instance(HARD_MAX_CITIES + 1).distance_matrix()
    with pytest.raises(CapacityExceededError):
        held_karp(dm, max_cities=HARD_MAX_CITIES + 5)
