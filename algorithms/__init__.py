"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the trace engine knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, description, …),
        …
    }

Every runner has the same shape: fn(graph, start, goal, **kw) -> Trace.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from errors import UnknownAlgorithm
from graph import Graph
from algorithms.step     import Step, Trace, TraceBuilder
from algorithms.bfs      import bfs      as _bfs
from algorithms.dfs      import dfs      as _dfs
from algorithms.dijkstra import dijkstra as _dijkstra
from algorithms.astar    import astar    as _astar, HEURISTICS


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search (BFS)"
    fn:                Callable[..., Trace]   # the runner
    description:       str      = ""          # paragraph for the info card
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    data_structure:    str      = ""          # e.g. "Queue (FIFO)"
    weighted:          bool     = False       # does the runner read edge weights?
    has_heuristic:     bool     = False       # A* accepts heuristic=…

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "description":      self.description,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "data_structure":   self.data_structure,
            "weighted":         self.weighted,
            "has_heuristic":    self.has_heuristic,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search (BFS)", fn=_bfs,
        description=(
            "BFS explores nodes level by level using a queue (FIFO). It guarantees the "
            "shortest path in unweighted graphs by visiting all nodes at distance k "
            "before visiting nodes at distance k+1."
        ),
        complexity_time="O(V + E)", complexity_space="O(V)", data_structure="Queue (FIFO)",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search (DFS)", fn=_dfs,
        description=(
            "DFS explores as far as possible along each branch using a stack (LIFO). "
            "It may not find the shortest path but uses less memory."
        ),
        complexity_time="O(V + E)", complexity_space="O(V)", data_structure="Stack (LIFO)",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Shortest Path Algorithm", fn=_dijkstra,
        description=(
            "Dijkstra's algorithm finds the shortest path in weighted graphs with "
            "non-negative weights by always settling the closest unvisited node."
        ),
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        data_structure="Priority Queue", weighted=True,
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search Algorithm", fn=_astar,
        description=(
            "A* combines the actual cost from start (g) with a heuristic estimate to "
            "the goal (h). Optimal when h never overestimates the remaining cost."
        ),
        complexity_time="O(b^d)", complexity_space="O(b^d)",
        data_structure="Priority Queue + Heuristic", weighted=True, has_heuristic=True,
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def run_algorithm(key: str, graph: Graph, start: int, goal: int, **kwargs) -> Trace:
    """Dispatch to the runner registered under key."""
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithm(f"Unknown algorithm: {key}")
    if not info.has_heuristic:
        kwargs.pop("heuristic", None)
    return info.fn(graph, start, goal, **kwargs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "HEURISTICS",
    "Step",
    "Trace",
    "TraceBuilder",
    "get_algorithm",
    "list_algorithms",
    "run_algorithm",
]
