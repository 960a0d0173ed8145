"""Invariants every Trace must satisfy, checked over seeded random graphs."""
import math

import pytest

from conftest import RANDOM_SEEDS, RUNNER_KEYS, make_random_graph, reference_distances
from algorithms import run_algorithm


def _endpoints(graph):
    ids = graph.node_ids()
    return ids[0], ids[-1]


def _path_is_walkable(graph, path):
    return all(graph.has_edge(a, b) for a, b in zip(path, path[1:]))


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
@pytest.mark.parametrize("key", RUNNER_KEYS)
def test_structural_invariants(key, seed):
    graph = make_random_graph(seed)
    start, goal = _endpoints(graph)
    trace = run_algorithm(key, graph, start, goal)
    known = set(graph.node_ids())

    assert len(trace) >= 2
    assert [s.index for s in trace.steps] == list(range(len(trace)))
    assert [s.is_final for s in trace.steps] == [False] * (len(trace) - 1) + [True]

    for step in trace.steps:
        assert step.visited <= known
        assert step.current <= known
        assert set(step.frontier) <= known
        if not step.is_final:
            assert step.path == ()

    if trace.found:
        assert trace.path[0] == start
        assert trace.path[-1] == goal
        assert len(set(trace.path)) == len(trace.path)
        assert _path_is_walkable(graph, trace.path)
        assert trace.final_step.path == trace.path
    else:
        assert trace.path == ()
        assert trace.total_cost == 0


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
@pytest.mark.parametrize("key", RUNNER_KEYS)
def test_found_iff_reachable(key, seed):
    graph = make_random_graph(seed, p=0.2)
    start, goal = _endpoints(graph)
    reachable = not math.isinf(reference_distances(graph)[(start, goal)])
    assert run_algorithm(key, graph, start, goal).found is reachable


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
def test_bfs_hop_count_is_minimal(seed):
    graph = make_random_graph(seed)
    start, goal = _endpoints(graph)
    trace = run_algorithm("bfs", graph, start, goal)
    if trace.found:
        assert trace.total_cost == reference_distances(graph, weighted=False)[(start, goal)]


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
def test_dijkstra_cost_is_minimal(seed):
    graph = make_random_graph(seed)
    start, goal = _endpoints(graph)
    trace = run_algorithm("dijkstra", graph, start, goal)
    if trace.found:
        assert trace.total_cost == reference_distances(graph)[(start, goal)]
        assert trace.total_cost == sum(graph.weight(a, b) for a, b in zip(trace.path, trace.path[1:]))


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
def test_astar_with_zero_heuristic_is_minimal(seed):
    graph = make_random_graph(seed)
    start, goal = _endpoints(graph)
    trace = run_algorithm("astar", graph, start, goal, heuristic="zero")
    if trace.found:
        assert trace.total_cost == reference_distances(graph)[(start, goal)]


@pytest.mark.parametrize("seed", RANDOM_SEEDS)
@pytest.mark.parametrize("key", RUNNER_KEYS)
def test_runners_do_not_mutate_the_graph(key, seed):
    graph = make_random_graph(seed)
    before = graph.to_dict()
    run_algorithm(key, graph, *_endpoints(graph))
    assert graph.to_dict() == before


@pytest.mark.parametrize("key", RUNNER_KEYS)
def test_deterministic(key, sample_graph):
    a = run_algorithm(key, sample_graph, 0, 9)
    b = run_algorithm(key, sample_graph, 0, 9)
    assert a == b
