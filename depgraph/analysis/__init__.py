"""
depgraph Analysis Module

Stateless passes over a DependencyGraph:
- Cycle detection (DFS with recursion stack)
- Topological sorting (Kahn's algorithm)
- Statistics and chain tracing
- Validation and text reports

Usage:
    from depgraph.analysis import detect_cycles, topological_order

    order = topological_order(graph)
    if order is None:
        for cycle in detect_cycles(graph):
            print(" -> ".join(cycle.cycle))
"""

from .cycle_detector import (
    detect_cycles,
    find_cycles_from,
    has_cycles,
    cycle_members,
    cycle_edges,
    format_cycle,
)
from .topological_sorter import (
    topological_order,
    load_order,
)
from .statistics import compute_statistics
from .chain_tracer import (
    dependency_chain,
    transitive_dependencies,
    transitive_dependents,
    dependency_tree,
)
from .validator import ValidationResult, validate_graph
from .analyzer import DependencyAnalyzer, analyze
from .display import format_report, print_report

__all__ = [
    "detect_cycles",
    "find_cycles_from",
    "has_cycles",
    "cycle_members",
    "cycle_edges",
    "format_cycle",
    "topological_order",
    "load_order",
    "compute_statistics",
    "dependency_chain",
    "transitive_dependencies",
    "transitive_dependents",
    "dependency_tree",
    "ValidationResult",
    "validate_graph",
    "DependencyAnalyzer",
    "analyze",
    "format_report",
    "print_report",
]
