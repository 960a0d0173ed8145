"""
bfs.py — Breadth-First Search
==============================
Records a Step at every meaningful event:
  1. Initialise  →  source enqueued and marked visited
  2. Dequeue a node  →  it becomes CURRENT
  3. Enqueue its unseen neighbours (or report there are none)
  4. Final step  →  reconstructed path, or "no path"

Nodes are marked visited the moment they are enqueued, so nothing is
ever enqueued twice.  Every node at depth k is enqueued before any node
at depth k+1 is dequeued, which is what makes the path shortest by hop
count.
"""

import logging
from collections import deque
from typing import Dict

from graph import Graph
from algorithms.common import check_endpoints, format_ids, reconstruct_path
from algorithms.step import Trace, TraceBuilder

logger = logging.getLogger(__name__)


def bfs(graph: Graph, start: int, goal: int) -> Trace:
    """
    Args:
        graph : The graph to search (read only).
        start : Starting node id.
        goal  : Goal node id.

    Returns:
        Trace – cost is the number of edges on the path.
    """
    check_endpoints(graph, start, goal)
    logger.debug("BFS %s → %s on %r", start, goal, graph)

    tb      = TraceBuilder("bfs", start, goal)
    queue   = deque([start])
    visited = {start}
    parent: Dict[int, int] = {}

    # --- initialisation step ---
    tb.emit(
        "Initialize BFS",
        f"Starting BFS from node {start}. Added to queue and marked as visited. "
        f"BFS uses FIFO (First In, First Out) order.",
        visited=visited,
        frontier=queue,
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()

        tb.emit(
            f"Process Node {node}",
            f"Dequeued node {node} from front of queue. "
            f"Now checking if it's our target node {goal}.",
            visited=visited,
            current=[node],
            frontier=queue,
        )

        # -- goal check --
        if node == goal:
            path = reconstruct_path(parent, start, goal)
            tb.emit(
                "Goal Found!",
                f"Found target node {goal}! BFS guarantees this is the shortest path "
                f"with {len(path) - 1} edge(s).",
                visited=visited,
                current=[node],
                path=path,
            )
            logger.info("BFS reached %s in %d edge(s)", goal, len(path) - 1)
            return tb.finish(found=True, path=path, total_cost=len(path) - 1)

        # -- explore neighbours --
        fresh = [nbr for nbr in graph.neighbours(node) if nbr not in visited]
        for nbr in fresh:
            visited.add(nbr)
            parent[nbr] = node
            queue.append(nbr)

        if fresh:
            tb.emit(
                "Explore Neighbors",
                f"Added unvisited neighbors of node {node} to queue: [{format_ids(fresh)}]. "
                f"They'll be processed level by level.",
                visited=visited,
                frontier=queue,
            )
        else:
            tb.emit(
                "No New Neighbors",
                f"Node {node} has no unvisited neighbors. "
                f"All neighbors were already visited or added to queue.",
                visited=visited,
                frontier=queue,
            )

    # --- exhausted without finding goal ---
    tb.emit(
        "No Path Found",
        f"Queue is empty and target node {goal} was not reached. "
        f"Node {goal} is not reachable from node {start}.",
        visited=visited,
    )
    logger.info("BFS: %s unreachable from %s", goal, start)
    return tb.finish(found=False)
