"""
session.py — Editing Session
=============================
Owns the Graph, the start / goal / algorithm selection and the
PlaybackController.  The HTTP layer talks to a Session instead of
module-level globals.

Invariant: the loaded Trace always matches the current graph and
selections.  Every edit or selection change unloads it (which also
cancels any auto-play), so at most one playback is ever active.
"""

import logging
from typing import Callable, Optional

from errors import InvalidEndpoints, UnknownAlgorithm
from graph import Graph, Node, Edge
from algorithms import HEURISTICS, get_algorithm, run_algorithm
from algorithms.step import Step, Trace
from engine.playback import PlaybackController

logger = logging.getLogger(__name__)


class Session:
    """
    Attributes:
        graph      : The graph being edited.
        start      : Selected start node id, or None.
        goal       : Selected goal node id, or None.
        algorithm  : Selected registry key.
        heuristic  : Heuristic key handed to runners that accept one.
        controller : PlaybackController holding the current Trace.
    """

    def __init__(
        self,
        graph: Optional[Graph] = None,
        algorithm: str = "bfs",
        on_step: Optional[Callable[[Step], None]] = None,
        interval: Optional[float] = None,
    ):
        if get_algorithm(algorithm) is None:
            raise UnknownAlgorithm(f"Unknown algorithm: {algorithm}")
        self.graph:      Graph              = graph if graph is not None else Graph()
        self.start:      Optional[int]      = None
        self.goal:       Optional[int]      = None
        self.algorithm:  str                = algorithm
        self.heuristic:  str                = "euclidean"
        self.controller: PlaybackController = PlaybackController(on_step=on_step, interval=interval)

    @property
    def trace(self) -> Optional[Trace]:
        return self.controller.trace

    # ------------------------------------------------------------------
    # Selections
    # ------------------------------------------------------------------
    def set_start(self, node_id: Optional[int]) -> None:
        self._require_node(node_id)
        self.start = node_id
        self.invalidate()

    def set_goal(self, node_id: Optional[int]) -> None:
        self._require_node(node_id)
        self.goal = node_id
        self.invalidate()

    def set_endpoints(self, start: Optional[int], goal: Optional[int]) -> None:
        self._require_node(start)
        self._require_node(goal)
        self.start = start
        self.goal  = goal
        self.invalidate()

    def select_algorithm(self, key: str, heuristic: Optional[str] = None) -> None:
        if get_algorithm(key) is None:
            raise UnknownAlgorithm(f"Unknown algorithm: {key}")
        if heuristic is not None and heuristic not in HEURISTICS:
            raise UnknownAlgorithm(f"Unknown heuristic: {heuristic}")
        self.algorithm = key
        if heuristic is not None:
            self.heuristic = heuristic
        self.invalidate()

    # ------------------------------------------------------------------
    # Graph edits
    # ------------------------------------------------------------------
    def add_node(self, x: float = 0.0, y: float = 0.0) -> Node:
        node = self.graph.add_node(x, y)
        self.invalidate()
        return node

    def add_edge(self, a: int, b: int, weight: float = 1) -> Edge:
        edge = self.graph.add_edge(a, b, weight)
        self.invalidate()
        return edge

    def remove_node(self, node_id: int) -> None:
        self.graph.remove_node(node_id)
        if self.start == node_id:
            self.start = None
        if self.goal == node_id:
            self.goal = None
        self.invalidate()

    def remove_edge(self, a: int, b: int) -> None:
        self.graph.remove_edge(a, b)
        self.invalidate()

    def replace_graph(self, graph: Graph) -> None:
        self.graph = graph
        if self.start is not None and not graph.has_node(self.start):
            self.start = None
        if self.goal is not None and not graph.has_node(self.goal):
            self.goal = None
        self.invalidate()

    def clear_graph(self) -> None:
        self.graph.clear()
        self.start = None
        self.goal  = None
        self.invalidate()

    def load_sample(self) -> None:
        """Teaching graph with start 0 and goal 9."""
        self.graph = Graph.sample()
        self.start = 0
        self.goal  = 9
        self.invalidate()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self) -> Trace:
        """Run the selected algorithm on a snapshot of the graph and load the Trace."""
        if self.start is None or self.goal is None:
            raise InvalidEndpoints("set start and goal nodes first")
        self.invalidate()
        snapshot = self.graph.copy()
        trace = run_algorithm(self.algorithm, snapshot, self.start, self.goal, heuristic=self.heuristic)
        logger.info(
            "Ran %s %s → %s: found=%s, %d steps",
            self.algorithm, self.start, self.goal, trace.found, len(trace),
        )
        self.controller.load(trace)
        return trace

    def invalidate(self) -> None:
        self.controller.unload()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _require_node(self, node_id: Optional[int]) -> None:
        if node_id is not None and not self.graph.has_node(node_id):
            raise InvalidEndpoints(f"node {node_id} is not in the graph")

    def __repr__(self) -> str:
        return (
            f"Session(graph={self.graph!r}, start={self.start}, goal={self.goal}, "
            f"algorithm={self.algorithm}, playback={self.controller.state.value})"
        )
