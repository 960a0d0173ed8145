"""
errors.py — Trace Engine Exceptions
====================================
Every failure the engine can raise, in one place.

Each class also derives from the closest builtin so callers that only
know about ValueError / KeyError / IndexError keep working.

Not errors:
  - goal unreachable from start  → a normal Trace with found = False
  - cancelling an auto-play      → a normal playback state transition
"""


class TraceEngineError(Exception):
    """Base class for everything raised by the trace engine."""


# ---------------------------------------------------------------------------
# Runner preconditions
# ---------------------------------------------------------------------------
class InvalidEndpoints(TraceEngineError, ValueError):
    """start / goal missing, equal, or the graph has fewer than 2 nodes."""


class UnknownAlgorithm(TraceEngineError, KeyError):
    """Algorithm key is not in the registry."""

    # plain message instead of KeyError's quoted repr
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


# ---------------------------------------------------------------------------
# Graph model
# ---------------------------------------------------------------------------
class EdgeNotFound(TraceEngineError, KeyError):
    """A neighbour relationship without a matching edge. Fatal."""

    def __init__(self, a: int, b: int):
        super().__init__(f"no edge between {a} and {b}")
        self.a = a
        self.b = b

    def __str__(self) -> str:
        return str(self.args[0])


class GraphEditError(TraceEngineError, ValueError):
    """Rejected edit: self-loop, duplicate edge, unknown node, bad weight."""


class PathReconstructionError(TraceEngineError, RuntimeError):
    """Predecessor map does not lead from goal back to start. Fatal."""


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
class IndexOutOfRange(TraceEngineError, IndexError):
    """Cursor navigation outside [0, len(trace) - 1]."""

    def __init__(self, index: int, length: int):
        super().__init__(f"step index {index} out of range for trace of length {length}")
        self.index  = index
        self.length = length


class InvalidPlaybackState(TraceEngineError, RuntimeError):
    """Operation is not legal in the controller's current state."""


# ---------------------------------------------------------------------------
# HTTP layer
# ---------------------------------------------------------------------------
class InvalidRequest(TraceEngineError, ValueError):
    """Request body or field has the wrong shape or type."""


__all__ = [
    "TraceEngineError",
    "InvalidEndpoints",
    "UnknownAlgorithm",
    "EdgeNotFound",
    "GraphEditError",
    "PathReconstructionError",
    "IndexOutOfRange",
    "InvalidPlaybackState",
    "InvalidRequest",
]
