"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  Runners read it, the Session
(standing in for the interactive editor) writes it.

Responsibilities:
  1. Read contract used by the runners        (has_node, neighbours, weight, …)
  2. Editing surface used by the editor       (add / remove nodes & edges)
  3. Snapshots                                (copy — a run never sees edits)
  4. Serialisation round-trip                 (to_dict / from_dict)
  5. The built-in teaching graph              (sample)

Design decisions:
  - Nodes live in an arena dict keyed by integer id.  Ids come from a
    counter that only moves forward, so a removed id is never handed out
    again within the lifetime of this Graph (clear() starts over).
  - Edges are keyed by the normalised (min, max) id pair, which makes the
    "at most one edge per unordered pair" rule a dict lookup.
  - Each Node keeps its neighbour ids in edge-insertion order; runners
    rely on that order for deterministic traces.
"""

import logging
import math
from numbers import Real
from typing import Dict, List, Optional, Tuple

from errors import EdgeNotFound, GraphEditError
from graph.edge import Edge
from graph.node import Node

logger = logging.getLogger(__name__)


# (node_a, node_b, weight) of the teaching graph, ids 0..9
_SAMPLE_EDGES: List[Tuple[int, int, int]] = [
    (0, 1, 4), (1, 2, 3), (0, 3, 5), (1, 4, 2), (2, 5, 4), (2, 6, 3),
    (3, 4, 3), (4, 5, 2), (5, 6, 5), (3, 7, 4), (4, 7, 6), (4, 8, 3),
    (5, 8, 4), (5, 9, 2), (6, 9, 3), (7, 8, 3), (8, 9, 4),
]

# offsets from the canvas centre for sample nodes 0..9
_SAMPLE_OFFSETS: List[Tuple[float, float]] = [
    (-200, -100), (0, -150), (200, -100),
    (-250, 0), (-80, 0), (80, 0), (250, 0),
    (-200, 100), (0, 150), (200, 100),
]


class Graph:
    """
    Attributes:
        nodes    : {node_id: Node}   (insertion ordered)
        edges    : {(min_id, max_id): Edge}
        _next_id : next id add_node() will hand out
    """

    def __init__(self):
        self.nodes:    Dict[int, Node]             = {}
        self.edges:    Dict[Tuple[int, int], Edge] = {}
        self._next_id: int                         = 0

    # ==================================================================
    # READ CONTRACT (what the runners use)
    # ==================================================================
    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def neighbours(self, node_id: int) -> List[int]:
        """Neighbour ids of node_id in edge-insertion order."""
        node = self.nodes.get(node_id)
        return list(node.neighbours) if node else []

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        return self.edges.get(Edge.key_for(a, b))

    def has_edge(self, a: int, b: int) -> bool:
        return Edge.key_for(a, b) in self.edges

    def weight(self, a: int, b: int) -> float:
        """Weight of the edge a ↔ b (either order).  Raises EdgeNotFound."""
        edge = self.edges.get(Edge.key_for(a, b))
        if edge is None:
            raise EdgeNotFound(a, b)
        return edge.weight

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    # ==================================================================
    # EDITING SURFACE
    # ==================================================================
    def add_node(self, x: float = 0.0, y: float = 0.0, node_id: Optional[int] = None) -> Node:
        """Create a node.  Without node_id the next unused id is assigned."""
        if node_id is None:
            node_id = self._next_id
        elif node_id in self.nodes:
            raise GraphEditError(f"node {node_id} already exists")
        elif node_id < 0:
            raise GraphEditError(f"node id must be non-negative, got {node_id}")

        node = Node(node_id=node_id, x=x, y=y)
        self.nodes[node_id] = node
        self._next_id = max(self._next_id, node_id + 1)
        return node

    def add_edge(self, a: int, b: int, weight: float = 1) -> Edge:
        if a == b:
            raise GraphEditError(f"cannot connect node {a} to itself")
        for nid in (a, b):
            if nid not in self.nodes:
                raise GraphEditError(f"unknown node {nid}")
        if self.has_edge(a, b):
            raise GraphEditError(f"edge {a} ↔ {b} already exists")
        if isinstance(weight, bool) or not isinstance(weight, Real) or math.isnan(weight):
            raise GraphEditError(f"edge weight must be a number, got {weight!r}")
        if weight < 0:
            raise GraphEditError(f"edge weight must be non-negative, got {weight}")

        edge = Edge(a, b, weight)
        self.edges[edge.key] = edge
        self.nodes[a].neighbours.append(b)
        self.nodes[b].neighbours.append(a)
        return edge

    def remove_edge(self, a: int, b: int) -> None:
        edge = self.edges.pop(Edge.key_for(a, b), None)
        if edge is None:
            return
        self.nodes[edge.a].neighbours.remove(edge.b)
        self.nodes[edge.b].neighbours.remove(edge.a)

    def remove_node(self, node_id: int) -> None:
        node = self.nodes.get(node_id)
        if node is None:
            return
        # remove every edge touching this node
        for nbr in list(node.neighbours):
            self.remove_edge(node_id, nbr)
        del self.nodes[node_id]

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._next_id = 0

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def copy(self) -> "Graph":
        """Independent deep copy; edits to either side never leak across."""
        g = Graph()
        for node in self.nodes.values():
            clone = Node(node_id=node.id, x=node.x, y=node.y)
            clone.neighbours = list(node.neighbours)
            g.nodes[node.id] = clone
        for key, edge in self.edges.items():
            g.edges[key] = Edge(edge.a, edge.b, edge.weight)
        g._next_id = self._next_id
        return g

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes":   [n.to_dict() for n in self.nodes.values()],
            "edges":   [e.to_dict() for e in self.edges.values()],
            "next_id": self._next_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            g.add_node(node.x, node.y, node_id=node.id)
        for ed in data.get("edges", []):
            edge = Edge.from_dict(ed)
            g.add_edge(edge.a, edge.b, edge.weight)
        g._next_id = max(g._next_id, int(data.get("next_id", 0)))
        return g

    # ==================================================================
    # SAMPLE GRAPH
    # ==================================================================
    @classmethod
    def sample(cls, canvas_w: float = 800, canvas_h: float = 500) -> "Graph":
        """
        Ten-node weighted teaching graph laid out around the canvas centre.
        Conventional endpoints are node 0 (start) and node 9 (goal).
        """
        g = cls()
        cx, cy = canvas_w / 2, canvas_h / 2
        for dx, dy in _SAMPLE_OFFSETS:
            g.add_node(cx + dx, cy + dy)
        for a, b, w in _SAMPLE_EDGES:
            g.add_edge(a, b, w)
        logger.debug("Built sample graph: %r", g)
        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
