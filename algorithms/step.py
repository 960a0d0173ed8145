"""
step.py — Algorithm Step Snapshot & Trace
==========================================
Every runner produces a Trace: an ordered tuple of Step objects plus
the terminal outcome.  A Step is a frozen-in-time picture of everything
the presentation layer needs for one frame:

    • Which nodes are visited / current / in the frontier
    • The reconstructed path (terminal success step only)
    • Distances (Dijkstra) or g-scores (A*) where they exist
    • A short title and a plain-English explanation of the step

Design decisions:
  - Step and Trace are frozen dataclasses.  Set-like fields are
    frozensets, sequences are tuples and distances is a read-only
    mapping proxy, so a Step handed to the UI can never be altered
    behind the runner's back.  Distances take no part in the hash.
  - Runners never number steps themselves: TraceBuilder assigns indices
    0, 1, 2, … as steps are emitted, so gaps and repeats cannot happen.
"""

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple


def _jsonable(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        index       : 0-based position of this step in its Trace.
        title       : Short headline, e.g. "Process Node 3".
        description : Human-readable "what just happened and why".
        visited     : Node ids visited / settled so far.
        current     : Node id(s) being processed right now (empty on bookkeeping steps).
        frontier    : Queue / stack / unvisited set / open set, in order.
        path        : Reconstructed start → goal path (terminal success step only).
        distances   : {node_id: float} — Dijkstra distances or A* g-scores.
        is_final    : True on the very last step of the Trace.
    """

    index:        int
    title:        str
    description:  str
    visited:      FrozenSet[int]         = frozenset()
    current:      FrozenSet[int]         = frozenset()
    frontier:     Tuple[int, ...]        = ()
    path:         Tuple[int, ...]        = ()
    distances:    Mapping[int, float]    = field(default_factory=lambda: MappingProxyType({}), hash=False)
    is_final:     bool                   = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":       self.index,
            "title":       self.title,
            "description": self.description,
            "visited":     sorted(self.visited),
            "current":     sorted(self.current),
            "frontier":    list(self.frontier),
            "path":        list(self.path),
            "distances":   {str(k): _jsonable(v) for k, v in self.distances.items()},
            "is_final":    self.is_final,
        }


@dataclass(frozen=True)
class Trace:
    """
    Attributes:
        algorithm  : Registry key of the runner that produced it.
        start/goal : Endpoints of the run.
        steps      : Every Step, index-ordered.
        found      : Whether goal was reached.
        path       : start → goal path, empty when not found.
        total_cost : Edge count (BFS / DFS) or summed weight (Dijkstra / A*).
    """

    algorithm:   str
    start:       int
    goal:        int
    steps:       Tuple[Step, ...]
    found:       bool
    path:        Tuple[int, ...] = ()
    total_cost:  float           = 0

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __iter__(self):
        return iter(self.steps)

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    def to_dict(self, include_steps: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "algorithm":   self.algorithm,
            "start":       self.start,
            "goal":        self.goal,
            "found":       self.found,
            "path":        list(self.path),
            "total_cost":  _jsonable(self.total_cost),
            "total_steps": len(self.steps),
        }
        if include_steps:
            data["steps"] = [s.to_dict() for s in self.steps]
        return data


# ---------------------------------------------------------------------------
# Convenience builder so runners don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Scratch-pad that runners use to emit Steps and close the Trace.

    Usage inside a runner:
        tb = TraceBuilder("bfs", start, goal)
        tb.emit("Initialize BFS", "…", visited={start}, frontier=[start])
        …
        return tb.finish(found=True, path=path, total_cost=len(path) - 1)
    """

    def __init__(self, algorithm: str, start: int, goal: int):
        self.algorithm = algorithm
        self.start     = start
        self.goal      = goal
        self.steps:    List[Step] = []

    def emit(
        self,
        title: str,
        description: str,
        visited: Iterable[int] = (),
        current: Iterable[int] = (),
        frontier: Iterable[int] = (),
        path: Iterable[int] = (),
        distances: Optional[Mapping[int, float]] = None,
    ) -> Step:
        step = Step(
            index=len(self.steps),
            title=title,
            description=description,
            visited=frozenset(visited),
            current=frozenset(current),
            frontier=tuple(frontier),
            path=tuple(path),
            distances=MappingProxyType(dict(distances or {})),
        )
        self.steps.append(step)
        return step

    def finish(self, found: bool, path: Iterable[int] = (), total_cost: float = 0) -> Trace:
        if not self.steps:
            raise RuntimeError("a trace needs at least one step")
        self.steps[-1] = replace(self.steps[-1], is_final=True)
        return Trace(
            algorithm=self.algorithm,
            start=self.start,
            goal=self.goal,
            steps=tuple(self.steps),
            found=found,
            path=tuple(path),
            total_cost=total_cost if found else 0,
        )
