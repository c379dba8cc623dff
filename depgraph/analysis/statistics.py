"""
Dependency Statistics

Aggregate metrics derived from a built graph.
"""

from typing import List, Optional

from ..core.graph_model import CircularDependency, DependencyGraph, DependencyStatistics
from .cycle_detector import detect_cycles


def compute_statistics(graph: DependencyGraph,
                       cycles: Optional[List[CircularDependency]] = None) -> DependencyStatistics:
    """
    Compute node counts, average dependency count, maximum depth and cycle count.

    Args:
        graph: Graph to summarize; depths are read as stored
        cycles: Previously detected cycles; detected here when omitted
    """
    if cycles is None:
        cycles = detect_cycles(graph)

    stats = DependencyStatistics(total_nodes=len(graph.nodes),
                                 circular_dependencies=len(cycles))
    for node in graph.nodes.values():
        stats.total_edges += len(node.dependencies)
        stats.max_depth = max(stats.max_depth, node.depth)
        if node.dependencies:
            stats.nodes_with_dependencies += 1
        if node.dependents:
            stats.nodes_with_dependents += 1
        if not node.dependencies and not node.dependents:
            stats.isolated_nodes += 1

    if stats.total_nodes:
        stats.average_dependencies = stats.total_edges / stats.total_nodes
    return stats
