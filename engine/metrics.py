"""
metrics.py — Run Summary
=========================
The numbers the statistics panel shows for a finished run.

Usage:
    trace   = run_algorithm("dijkstra", graph, 0, 9)
    metrics = summarize(trace, graph)
"""

from dataclasses import asdict, dataclass
from typing import Optional

from graph import Graph
from algorithms.step import Trace


@dataclass
class RunMetrics:
    algorithm:      str   = ""
    node_count:     int   = 0
    edge_count:     int   = 0
    total_steps:    int   = 0
    nodes_visited:  int   = 0          # visited set size at the final step
    path_length:    int   = 0          # number of nodes on the path
    path_cost:      float = 0.0        # Trace.total_cost
    path_found:     bool  = False

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(trace: Trace, graph: Optional[Graph] = None) -> RunMetrics:
    """Build RunMetrics from a Trace (and the graph it ran on, for counts)."""
    return RunMetrics(
        algorithm=trace.algorithm,
        node_count=graph.node_count() if graph else 0,
        edge_count=graph.edge_count() if graph else 0,
        total_steps=len(trace),
        nodes_visited=len(trace.final_step.visited),
        path_length=len(trace.path),
        path_cost=trace.total_cost,
        path_found=trace.found,
    )
