"""
Pytest configuration and shared fixtures.

Graphs here are small and built by hand so expected traces can be
worked out on paper.  `reference_distances` is an independent
Floyd–Warshall used to check the runners' answers.
"""

import math
import random
from typing import Dict, Tuple

import pytest

from graph import Graph

RUNNER_KEYS = ["bfs", "dfs", "dijkstra", "astar"]


# ---------------------------------------------------------------------------
# Hand-built graphs
# ---------------------------------------------------------------------------
@pytest.fixture
def path_graph() -> Graph:
    """A(0) – B(1) – C(2), unit weights, no A–C edge."""
    g = Graph()
    for x in (0, 40, 80):
        g.add_node(x, 0)
    g.add_edge(0, 1, 1)
    g.add_edge(1, 2, 1)
    return g


@pytest.fixture
def weighted_triangle() -> Graph:
    """A(0)–B(1) w4, A–C(2) w1, C–B w1.  Nodes close together so h is admissible."""
    g = Graph()
    g.add_node(0, 0)      # A
    g.add_node(40, 0)     # B
    g.add_node(20, 10)    # C
    g.add_edge(0, 1, 4)
    g.add_edge(0, 2, 1)
    g.add_edge(2, 1, 1)
    return g


@pytest.fixture
def disconnected_pair() -> Graph:
    g = Graph()
    g.add_node(0, 0)
    g.add_node(100, 0)
    return g


@pytest.fixture
def sample_graph() -> Graph:
    return Graph.sample()


# ---------------------------------------------------------------------------
# Random graphs for property checks
# ---------------------------------------------------------------------------
def make_random_graph(seed: int, n: int = 9, p: float = 0.3, max_weight: int = 9) -> Graph:
    rng = random.Random(seed)
    g = Graph()
    for _ in range(n):
        g.add_node(rng.uniform(0, 800), rng.uniform(0, 500))
    for a in range(n):
        for b in range(a + 1, n):
            if rng.random() < p:
                g.add_edge(a, b, rng.randint(1, max_weight))
    return g


def reference_distances(graph: Graph, weighted: bool = True) -> Dict[Tuple[int, int], float]:
    """All-pairs shortest distances (Floyd–Warshall)."""
    ids = graph.node_ids()
    dist = {(a, b): (0 if a == b else math.inf) for a in ids for b in ids}
    for edge in graph.edges.values():
        w = edge.weight if weighted else 1
        dist[(edge.a, edge.b)] = min(dist[(edge.a, edge.b)], w)
        dist[(edge.b, edge.a)] = min(dist[(edge.b, edge.a)], w)
    for k in ids:
        for i in ids:
            for j in ids:
                if dist[(i, k)] + dist[(k, j)] < dist[(i, j)]:
                    dist[(i, j)] = dist[(i, k)] + dist[(k, j)]
    return dist


RANDOM_SEEDS = list(range(12))
