"""
Dependency Analyzer

One-call analysis of a registry snapshot:

    registry + resolver
        -> GraphBuilder      (graph, diagnostics)
        -> detect_cycles     (cycles)
        -> topological_order (load order or None)
        -> compute_statistics

Usage:
    from depgraph import DependencyAnalyzer, field_resolver

    analyzer = DependencyAnalyzer(resolver=field_resolver('extends', 'mixins'))
    result = analyzer.analyze(registry)
    if result.topological_order is None:
        for cycle in result.cycles:
            print(' -> '.join(cycle.cycle))
"""

import logging
from typing import Any, Callable, Optional

from ..core.graph_builder import GraphBuilder, Registry, compute_depths
from ..core.graph_model import DependencyAnalysisResult, DependencyGraph
from ..core.resolvers import Resolver, default_resolver, template_id
from .cycle_detector import detect_cycles
from .statistics import compute_statistics
from .topological_sorter import topological_order


class DependencyAnalyzer:
    """
    Builds and analyzes dependency graphs.

    The resolver is held per analyzer instance and can be overridden per
    call; there is no shared default beyond ``default_resolver`` itself.
    Each ``analyze()`` call builds a fresh graph.
    """

    def __init__(self, resolver: Resolver = default_resolver,
                 detect_cycles: bool = True,
                 key: Callable[[Any], str] = template_id):
        self.resolver = resolver
        self.detect_cycles = detect_cycles
        self.key = key
        self.builder = GraphBuilder()
        self.logger = logging.getLogger(__name__)

    def analyze(self, registry: Registry,
                resolver: Optional[Resolver] = None) -> DependencyAnalysisResult:
        """Build a graph from ``registry`` and analyze it"""
        outcome = self.builder.build(registry, resolver=resolver or self.resolver, key=self.key)
        result = self.analyze_graph(outcome.graph)
        result.diagnostics = list(outcome.diagnostics)
        return result

    def analyze_file(self, filepath: str,
                     resolver: Optional[Resolver] = None) -> DependencyAnalysisResult:
        outcome = self.builder.build_from_file(filepath, resolver=resolver or self.resolver,
                                               key=self.key)
        result = self.analyze_graph(outcome.graph)
        result.diagnostics = list(outcome.diagnostics)
        return result

    def analyze_graph(self, graph: DependencyGraph) -> DependencyAnalysisResult:
        """
        Analyze an existing graph, e.g. one kept live with the mutator.

        Stale depths are recomputed first. Cycles are always listed;
        with ``detect_cycles=False`` they are left out of the statistics.
        """
        if graph.depths_stale:
            compute_depths(graph)

        cycles = detect_cycles(graph)
        order = topological_order(graph)
        statistics = compute_statistics(graph, cycles=cycles if self.detect_cycles else [])

        self.logger.info(
            f"Analysis complete: {statistics.total_nodes} entities, "
            f"{statistics.total_edges} dependencies, {len(cycles)} cycles, "
            f"max depth {statistics.max_depth}"
        )
        return DependencyAnalysisResult(
            graph=graph,
            cycles=cycles,
            topological_order=order,
            statistics=statistics,
        )


def analyze(registry: Registry, resolver: Resolver = default_resolver,
            key: Callable[[Any], str] = template_id) -> DependencyAnalysisResult:
    """Analyze a registry with a one-off DependencyAnalyzer"""
    return DependencyAnalyzer(resolver=resolver, key=key).analyze(registry)
