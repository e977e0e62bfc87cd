import pytest

from tsp_solver import TwoOptHistory, nearest_neighbor, reverse_segment, two_opt

from conftest import is_permutation, random_tour


def test_reverse_segment_is_pure():
    route = [0, 1, 2, 3, 4]
    assert reverse_segment(route, 1, 3) == [0, 3, 2, 1, 4]
    assert reverse_segment(route, 2, 4) == [0, 1, 4, 3, 2]
    assert route == [0, 1, 2, 3, 4]


@pytest.mark.parametrize("seed", range(5))
def test_never_lengthens_and_keeps_permutation(rand_instance, seed):
    dm = rand_instance(18, seed).distance_matrix()
    start = random_tour(18, seed)
    before = list(start)
    out = two_opt(dm, start)
    assert start == before
    assert is_permutation(out, 18)
    assert dm.route_distance(out) <= dm.route_distance(start) + 1e-9


def test_result_is_a_local_optimum(rand_instance):
    dm = rand_instance(14, seed=11).distance_matrix()
    out = two_opt(dm, random_tour(14, 11))
    L = dm.route_distance(out)
    n = len(out)
    for i in range(1, n - 2):
        for j in range(i + 2, n):
            assert dm.route_distance(reverse_segment(out, i, j)) >= L


def test_first_city_stays_put(rand_instance):
    dm = rand_instance(12, seed=2).distance_matrix()
    start = random_tour(12, 2)
    assert two_opt(dm, start)[0] == start[0]


def test_small_routes_untouched(rand_instance):
    for n in (1, 2, 3):
        dm = rand_instance(n).distance_matrix()
        assert two_opt(dm, list(range(n))) == list(range(n))


def test_history_is_strictly_decreasing(rand_instance):
    dm = rand_instance(20, seed=3).distance_matrix()
    start = random_tour(20, 3)
    history = TwoOptHistory()
    out = two_opt(dm, start, history=history)
    assert history.tours[0] == start
    assert history.lengths[0] == pytest.approx(dm.route_distance(start))
    assert history.tours[-1] == out
    assert all(b < a for a, b in zip(history.lengths, history.lengths[1:]))
    assert history.passes >= 1


def test_max_passes_stops_early(rand_instance):
    dm = rand_instance(30, seed=8).distance_matrix()
    start = nearest_neighbor(dm, 0)
    one = TwoOptHistory()
    two_opt(dm, start, max_passes=1, history=one)
    full = two_opt(dm, start)
    assert one.passes == 1
    assert one.lengths[-1] >= dm.route_distance(full) - 1e-9


def test_min_improvement_blocks_small_gains(rand_instance):
    dm = rand_instance(15, seed=6).distance_matrix()
    start = random_tour(15, 6)
    assert two_opt(dm, start, min_improvement=1e9) == start
