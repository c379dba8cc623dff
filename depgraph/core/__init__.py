"""
depgraph Core Module

Graph model, resolvers, graph building, incremental mutation and export.

Usage:
    from depgraph.core import GraphBuilder, add_dependency

    outcome = GraphBuilder().build(registry, resolver)
    graph = outcome.graph
    for diagnostic in outcome.failures:
        print(diagnostic.entity_id, diagnostic.message)

    add_dependency(graph, "page/home", "layout/base")
"""

# Graph Model - Data structures
from .graph_model import (
    # Enums
    NodeType,
    DiagnosticKind,
    BuildStatus,
    # Graph
    DependencyNode,
    DependencyGraph,
    # Records
    CircularDependency,
    DependencyStatistics,
    DependencyAnalysisResult,
    BuildDiagnostic,
    BuildOutcome,
)

# Resolvers
from .resolvers import (
    Resolver,
    default_resolver,
    field_resolver,
    template_id,
)

# Graph Builder
from .graph_builder import (
    GraphBuilder,
    build_graph,
    compute_depths,
    load_registry,
    normalize_registry,
)

# Incremental Mutator
from .mutator import (
    add_dependency,
    remove_dependency,
    remove_node,
    set_dependencies,
    clear,
)

# Graph Exporter
from .graph_exporter import GraphExporter

__all__ = [
    "NodeType",
    "DiagnosticKind",
    "BuildStatus",
    "DependencyNode",
    "DependencyGraph",
    "CircularDependency",
    "DependencyStatistics",
    "DependencyAnalysisResult",
    "BuildDiagnostic",
    "BuildOutcome",
    "Resolver",
    "default_resolver",
    "field_resolver",
    "template_id",
    "GraphBuilder",
    "build_graph",
    "compute_depths",
    "load_registry",
    "normalize_registry",
    "add_dependency",
    "remove_dependency",
    "remove_node",
    "set_dependencies",
    "clear",
    "GraphExporter",
]
