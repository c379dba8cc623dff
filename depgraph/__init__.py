"""
depgraph - Dependency Graph Engine

Discovers, validates and orders dependency relationships between uniquely
keyed artifacts (templates, plugins, modules, ...).

Usage:
    from depgraph import analyze, field_resolver

    registry = {
        "base": {},
        "page": {"extends": "base"},
    }
    result = analyze(registry)
    print(result.topological_order)   # ['base', 'page']
"""

from .core import (
    NodeType,
    DiagnosticKind,
    BuildStatus,
    DependencyNode,
    DependencyGraph,
    CircularDependency,
    DependencyStatistics,
    DependencyAnalysisResult,
    BuildDiagnostic,
    BuildOutcome,
    default_resolver,
    field_resolver,
    template_id,
    GraphBuilder,
    build_graph,
    compute_depths,
    load_registry,
    add_dependency,
    remove_dependency,
    remove_node,
    set_dependencies,
    GraphExporter,
)
from .analysis import (
    detect_cycles,
    topological_order,
    load_order,
    compute_statistics,
    dependency_chain,
    transitive_dependencies,
    transitive_dependents,
    dependency_tree,
    validate_graph,
    DependencyAnalyzer,
    analyze,
    format_report,
    print_report,
)
from .visualization import VisualizationExporter, export_visualization

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
    "default_resolver",
    "field_resolver",
    "template_id",
    "GraphBuilder",
    "build_graph",
    "compute_depths",
    "load_registry",
    "add_dependency",
    "remove_dependency",
    "remove_node",
    "set_dependencies",
    "GraphExporter",
    "detect_cycles",
    "topological_order",
    "load_order",
    "compute_statistics",
    "dependency_chain",
    "transitive_dependencies",
    "transitive_dependents",
    "dependency_tree",
    "validate_graph",
    "DependencyAnalyzer",
    "analyze",
    "format_report",
    "print_report",
    "VisualizationExporter",
    "export_visualization",
]

__version__ = "1.0.0"
