"""
dfs.py — Depth-First Search
=============================
Iterative DFS with an explicit stack (no Python recursion limit issues).

Records a Step at:
  1. Push start onto the stack
  2. Pop an already-visited node  →  "skip"
  3. Pop a fresh node  →  CURRENT, marked visited
  4. Push its unvisited neighbours (or backtrack when there are none)
  5. Goal popped  →  reconstruct path
  6. Stack empty  →  NOT FOUND

Visitation is checked on pop, not on push, so the same node can sit in
the stack more than once and "skip" steps are expected.  Neighbours are
pushed in reverse so they are expanded in forward neighbour order.
The predecessor of a node is whoever pushed it last: that copy is the
one nearest the top and therefore the one that gets popped first.
"""

import logging
from typing import Dict, List, Set

from graph import Graph
from algorithms.common import check_endpoints, format_ids, reconstruct_path
from algorithms.step import Trace, TraceBuilder

logger = logging.getLogger(__name__)


def dfs(graph: Graph, start: int, goal: int) -> Trace:
    """Depth-first search from start to goal.  No shortest-path guarantee."""
    check_endpoints(graph, start, goal)
    logger.debug("DFS %s → %s on %r", start, goal, graph)

    tb      = TraceBuilder("dfs", start, goal)
    stack:   List[int]      = [start]
    visited: Set[int]       = set()
    parent:  Dict[int, int] = {}

    # --- init step ---
    tb.emit(
        "Initialize DFS",
        f"Starting DFS from node {start}. Added to stack. "
        f"DFS uses LIFO (Last In, First Out) order.",
        frontier=stack,
    )

    # --- main loop ---
    while stack:
        node = stack.pop()

        # already visited (can happen because we mark-on-pop)
        if node in visited:
            tb.emit(
                f"Skip Visited Node {node}",
                f"Node {node} was already visited. This happens in DFS when "
                f"multiple paths lead to the same node.",
                visited=visited,
                frontier=stack,
            )
            continue

        visited.add(node)
        tb.emit(
            f"Visit Node {node}",
            f"Popped node {node} from stack and marked as visited. "
            f"Checking if it's our target node {goal}.",
            visited=visited,
            current=[node],
            frontier=stack,
        )

        # -- goal check --
        if node == goal:
            path = reconstruct_path(parent, start, goal)
            tb.emit(
                "Goal Found!",
                f"Found target node {goal}! Note: DFS may not find the shortest path, "
                f"just a valid path ({len(path) - 1} edge(s)).",
                visited=visited,
                current=[node],
                path=path,
            )
            logger.info("DFS reached %s in %d edge(s)", goal, len(path) - 1)
            return tb.finish(found=True, path=path, total_cost=len(path) - 1)

        # -- push unvisited neighbours --
        fresh = [nbr for nbr in graph.neighbours(node) if nbr not in visited]
        for nbr in reversed(fresh):
            parent[nbr] = node
            stack.append(nbr)

        if fresh:
            tb.emit(
                "Add Neighbors to Stack",
                f"Added unvisited neighbors of node {node} to stack: [{format_ids(fresh)}]. "
                f"DFS will explore deeply before backtracking.",
                visited=visited,
                frontier=stack,
            )
        else:
            tb.emit(
                "Backtrack",
                f"Node {node} has no unvisited neighbors. "
                f"DFS will backtrack to explore other branches.",
                visited=visited,
                frontier=stack,
            )

    # --- not found ---
    tb.emit(
        "No Path Found",
        f"Stack is empty and target node {goal} was not reached. "
        f"Node {goal} is not reachable from node {start}.",
        visited=visited,
    )
    logger.info("DFS: %s unreachable from %s", goal, start)
    return tb.finish(found=False)
