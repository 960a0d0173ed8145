from typing import List


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Integer identity, canvas position and an insertion-ordered neighbour list.

    Attributes:
        id          : Unique integer id, assigned by the Graph, never reused.
        x, y        : Canvas coordinates. Only A* reads them (heuristic).
        neighbours  : Neighbour node ids in the order their edges were added.
    """

    __slots__ = ("id", "x", "y", "neighbours")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self.id:         int       = node_id
        self.x:          float     = x
        self.y:          float     = y
        self.neighbours: List[int] = []

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance — used as default heuristic in A*."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=int(data["id"]), x=float(data.get("x", 0.0)), y=float(data.get("y", 0.0)))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.1f},{self.y:.1f}), neighbours={self.neighbours})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
