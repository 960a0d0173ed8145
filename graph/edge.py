"""
edge.py — Graph Edge
====================
Unordered pair of node ids plus a non-negative weight.

Design decisions:
  - `a` and `b` are node ids, NOT Node references, so the graph is an
    arena with no reference cycles and is cheap to snapshot.
  - `key` normalises the pair to (min, max) so the Graph can enforce
    "at most one edge per unordered pair" with a plain dict.
  - Weight defaults to 1 for unweighted graphs — BFS / DFS never read it.
"""

from typing import Optional, Tuple


class Edge:
    """
    Attributes:
        a, b   : Endpoint node ids (order is irrelevant).
        weight : Non-negative numeric cost (default 1).
    """

    __slots__ = ("a", "b", "weight")

    def __init__(self, a: int, b: int, weight: float = 1):
        self.a:      int   = a
        self.b:      int   = b
        self.weight: float = weight

    @staticmethod
    def key_for(a: int, b: int) -> Tuple[int, int]:
        return (a, b) if a <= b else (b, a)

    @property
    def key(self) -> Tuple[int, int]:
        return Edge.key_for(self.a, self.b)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: int, node_b: int) -> bool:
        """True if this edge links node_a ↔ node_b."""
        return self.key == Edge.key_for(node_a, node_b)

    def touches(self, node_id: int) -> bool:
        return node_id == self.a or node_id == self.b

    def other_end(self, node_id: int) -> Optional[int]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.a:
            return self.b
        if node_id == self.b:
            return self.a
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"a": self.a, "b": self.b, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(a=int(data["a"]), b=int(data["b"]), weight=data.get("weight", 1))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.a} ↔ {self.b}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.key == other.key and self.weight == other.weight

    def __hash__(self) -> int:
        return hash(self.key)
