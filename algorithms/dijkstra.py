"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Array-scan Dijkstra over an insertion-ordered unvisited set.

Records a Step at:
  1. Initialise distances (start = 0, everything else = ∞)
  2. Select the unvisited node with the smallest finite distance → settle it
  3. Relax its unvisited neighbours (one step, only if something improved)
  4. Goal settled  →  path found, reconstruct
  5. No finite distance left  →  "no more reachable nodes", then NOT FOUND

Ties on distance go to the node met first in the unvisited set, which is
node-insertion order.  Settling a node is final, which is only sound for
non-negative weights; the Graph refuses negative weights on insert.
"""

import logging
import math
from typing import Dict

from graph import Graph
from algorithms.common import check_endpoints, reconstruct_path
from algorithms.step import Trace, TraceBuilder

logger = logging.getLogger(__name__)

INF = math.inf


def _fmt(d: float) -> str:
    if math.isinf(d):
        return "∞"
    return f"{d:g}"


def dijkstra(graph: Graph, start: int, goal: int) -> Trace:
    """Shortest weighted path from start to goal.  Cost is the settled distance."""
    check_endpoints(graph, start, goal)
    logger.debug("Dijkstra %s → %s on %r", start, goal, graph)

    tb = TraceBuilder("dijkstra", start, goal)

    dist:   Dict[int, float] = {nid: INF for nid in graph.node_ids()}
    parent: Dict[int, int]   = {}
    dist[start] = 0
    # dict as an insertion-ordered set
    unvisited: Dict[int, None] = dict.fromkeys(graph.node_ids())

    def settled():
        return [nid for nid in dist if nid not in unvisited]

    # --- init step ---
    tb.emit(
        "Initialize Dijkstra",
        f"Set distance to start node {start} = 0, all others = ∞. "
        f"Dijkstra always processes the closest unvisited node.",
        frontier=unvisited,
        distances=dist,
    )

    # --- main loop ---
    while unvisited:
        current = None
        best    = INF
        for nid in unvisited:
            if dist[nid] < best:
                best    = dist[nid]
                current = nid

        if current is None:
            tb.emit(
                "No More Reachable Nodes",
                "All remaining unvisited nodes have infinite distance. "
                "They are not reachable from the start node.",
                visited=settled(),
                frontier=unvisited,
                distances=dist,
            )
            break

        del unvisited[current]

        tb.emit(
            f"Process Node {current}",
            f"Selected node {current} with shortest distance ({_fmt(dist[current])}). "
            f"Permanently settled - optimal distance found.",
            visited=settled(),
            current=[current],
            frontier=unvisited,
            distances=dist,
        )

        # -- goal check --
        if current == goal:
            path = reconstruct_path(parent, start, goal)
            tb.emit(
                "Shortest Path Found!",
                f"Reached target node {goal}! Optimal distance: {_fmt(dist[goal])}. "
                f"Dijkstra guarantees this is the shortest path.",
                visited=settled(),
                current=[current],
                path=path,
                distances=dist,
            )
            logger.info("Dijkstra reached %s at cost %s", goal, dist[goal])
            return tb.finish(found=True, path=path, total_cost=dist[goal])

        # -- relax neighbours --
        updated = []
        for nbr in graph.neighbours(current):
            if nbr not in unvisited:
                continue
            alt = dist[current] + graph.weight(current, nbr)
            if alt < dist[nbr]:
                dist[nbr]   = alt
                parent[nbr] = current
                updated.append(nbr)

        if updated:
            changes = ", ".join(f"{n}={_fmt(dist[n])}" for n in updated)
            tb.emit(
                "Relax Edges",
                f"Updated distances through node {current}: {changes}. Found shorter paths!",
                visited=settled(),
                current=updated,
                frontier=unvisited,
                distances=dist,
            )

    # --- not found ---
    tb.emit(
        "No Path Found",
        f"All reachable nodes processed. Target node {goal} is not reachable "
        f"from start node {start}.",
        visited=settled(),
        distances=dist,
    )
    logger.info("Dijkstra: %s unreachable from %s", goal, start)
    return tb.finish(found=False)
