"""Shared runner helpers: precondition check and path reconstruction."""

from typing import Dict, List

from errors import InvalidEndpoints, PathReconstructionError
from graph import Graph


def check_endpoints(graph: Graph, start: int, goal: int) -> None:
    """Raise InvalidEndpoints unless a run from start to goal is well-formed."""
    if graph.node_count() < 2:
        raise InvalidEndpoints("graph needs at least 2 nodes")
    if not graph.has_node(start):
        raise InvalidEndpoints(f"start node {start} is not in the graph")
    if not graph.has_node(goal):
        raise InvalidEndpoints(f"goal node {goal} is not in the graph")
    if start == goal:
        raise InvalidEndpoints("start and goal must be different nodes")


def reconstruct_path(parent: Dict[int, int], start: int, goal: int) -> List[int]:
    """
    Follow predecessors from goal back to start and reverse.

    parent never contains start.  A chain that dead-ends before start or
    loops is an internal invariant violation.
    """
    path = [goal]
    cur  = goal
    while cur != start:
        if cur not in parent:
            raise PathReconstructionError(f"node {cur} has no predecessor on the way to {start}")
        cur = parent[cur]
        path.append(cur)
        if len(path) > len(parent) + 1:
            raise PathReconstructionError(f"predecessor cycle while rebuilding path to {goal}")
    path.reverse()
    return path


def format_ids(ids) -> str:
    return ", ".join(str(i) for i in ids)
