"""
astar.py — A* Search
=====================
A* over an ordered open list and a closed set, with a pluggable heuristic.

Ships two heuristics (both take two Node objects, return float):
  • euclidean – straight-line distance between positions / HEURISTIC_SCALE
  • zero      – h = 0, A* degrades to Dijkstra

The Euclidean estimate is only admissible when every edge weight is at
least the scaled straight-line distance between its endpoints.  On
hand-placed graphs that is not guaranteed, so "optimal" in the success
step text means "optimal if h never overestimates".

Records a Step at:
  1. Initialise: start in the open list with f = h(start)
  2. Select the open node with the lowest f (first in list order on ties)
  3. Update improved / newly discovered neighbours (one step, if any)
  4. Goal selected  →  path found
  5. Open list empty  →  NOT FOUND
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Set, Union

from graph import Graph, Node
from algorithms.common import check_endpoints, reconstruct_path
from algorithms.step import Trace, TraceBuilder

logger = logging.getLogger(__name__)

INF = math.inf

# canvas pixels per unit of edge weight
HEURISTIC_SCALE = 50.0


# ---------------------------------------------------------------------------
# Built-in heuristics
# ---------------------------------------------------------------------------
def euclidean(a: Node, b: Node) -> float:
    return a.distance_to(b) / HEURISTIC_SCALE


def zero(a: Node, b: Node) -> float:
    """h=0 → A* degrades to Dijkstra.  Always admissible."""
    return 0.0


Heuristic = Callable[[Node, Node], float]

HEURISTICS: Dict[str, Heuristic] = {
    "euclidean": euclidean,
    "zero":      zero,
}


def astar(
    graph: Graph,
    start: int,
    goal: int,
    heuristic: Union[str, Heuristic, None] = "euclidean",
) -> Trace:
    """
    Args:
        graph     : The graph (read only).
        start     : Start node id.
        goal      : Goal node id.
        heuristic : Key into HEURISTICS, a callable(node, goal_node), or None for euclidean.

    Returns:
        Trace – cost is g(goal).
    """
    check_endpoints(graph, start, goal)
    h_fn = _resolve(heuristic)
    goal_node = graph.get_node(goal)
    logger.debug("A* %s → %s on %r", start, goal, graph)

    def h(nid: int) -> float:
        return h_fn(graph.get_node(nid), goal_node)

    tb = TraceBuilder("astar", start, goal)

    g_score: Dict[int, float] = {nid: INF for nid in graph.node_ids()}
    f_score: Dict[int, float] = {nid: INF for nid in graph.node_ids()}
    parent:  Dict[int, int]   = {}
    closed:  Set[int]         = set()
    open_list: List[int]      = [start]

    h_start = h(start)
    g_score[start] = 0
    f_score[start] = h_start

    # --- init step ---
    tb.emit(
        "Initialize A*",
        f"Starting A* search. Node {start} added to open set with "
        f"f-score = g(0) + h({h_start:.1f}) = {h_start:.1f}",
        frontier=open_list,
        distances=g_score,
    )

    # --- main loop ---
    while open_list:
        node = _lowest_f(open_list, f_score)

        tb.emit(
            f"Process Node {node}",
            f"Selected node {node} with lowest f-score ({f_score[node]:.1f}). "
            f"Moving from open to closed set.",
            visited=closed,
            current=[node],
            frontier=[n for n in open_list if n != node],
            distances=g_score,
        )

        # -- goal check --
        if node == goal:
            path = reconstruct_path(parent, start, goal)
            tb.emit(
                "Optimal Path Found!",
                f"Reached target node {goal}! A* found a path with cost "
                f"{g_score[goal]:.1f} using heuristic guidance "
                f"(optimal when the heuristic never overestimates).",
                visited=closed,
                current=[node],
                path=path,
                distances=g_score,
            )
            logger.info("A* reached %s at cost %s", goal, g_score[goal])
            return tb.finish(found=True, path=path, total_cost=g_score[goal])

        open_list.remove(node)
        closed.add(node)

        # -- examine neighbours --
        updated = []
        for nbr in graph.neighbours(node):
            if nbr in closed:
                continue
            tentative = g_score[node] + graph.weight(node, nbr)
            if nbr not in open_list:
                open_list.append(nbr)
            elif tentative >= g_score[nbr]:
                continue

            parent[nbr]  = node
            g_score[nbr] = tentative
            f_score[nbr] = tentative + h(nbr)
            updated.append(nbr)

        if updated:
            changes = ", ".join(f"{n}(f={f_score[n]:.1f})" for n in updated)
            tb.emit(
                "Update Neighbors",
                f"Updated neighbors: {changes}. Lower f-scores will be explored first.",
                visited=closed,
                current=updated,
                frontier=open_list,
                distances=g_score,
            )

    # --- not found ---
    tb.emit(
        "No Path Found",
        f"Open set is empty. No path exists between start node {start} "
        f"and target node {goal}; it is not reachable.",
        visited=closed,
        distances=g_score,
    )
    logger.info("A*: %s unreachable from %s", goal, start)
    return tb.finish(found=False)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _resolve(heuristic: Union[str, Heuristic, None]) -> Heuristic:
    if heuristic is None:
        return euclidean
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {heuristic}") from None


def _lowest_f(open_list: List[int], f_score: Dict[int, float]) -> int:
    """Linear scan; strict < keeps the first of equal f-scores."""
    best: Optional[int] = None
    for nid in open_list:
        if best is None or f_score[nid] < f_score[best]:
            best = nid
    return best
