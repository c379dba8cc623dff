"""
Graph Validation

Structural checks over a DependencyGraph with a readable report:
- errors: broken bidirectional references, edges to missing nodes
- warnings: circular dependencies, isolated entities, stale depths
- info: size summary
"""

from typing import Dict, List, Optional

from ..core.graph_model import CircularDependency, DependencyGraph
from .cycle_detector import detect_cycles, format_cycle


class ValidationResult:
    """Result of graph validation with error and warning tracking"""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: List[str] = []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.info.append(msg)

    def summary(self, max_items: int = 5) -> str:
        """Get a summary of the validation result"""
        lines = [f"Valid: {self.is_valid}"]
        for title, items in (("Errors", self.errors), ("Warnings", self.warnings)):
            if not items:
                continue
            lines.append(f"{title} ({len(items)}):")
            for item in items[:max_items]:
                lines.append(f"  - {item}")
            if len(items) > max_items:
                lines.append(f"  ... and {len(items) - max_items} more")
        return '\n'.join(lines)

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'errors': self.errors,
            'warnings': self.warnings,
            'info': self.info,
        }

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self.errors)}, warnings={len(self.warnings)})"


def validate_graph(graph: DependencyGraph,
                   cycles: Optional[List[CircularDependency]] = None) -> ValidationResult:
    """
    Validate a graph.

    Cycles are warnings rather than errors: a cyclic graph is a legal,
    fully described state, it just has no load order.
    """
    result = ValidationResult()

    for problem in graph.check_consistency():
        result.add_error(problem)

    if cycles is None:
        cycles = detect_cycles(graph)
    for cycle in cycles:
        result.add_warning(f"Circular dependency detected: {format_cycle(cycle)}")

    for node_id, node in graph.nodes.items():
        if node.is_isolated:
            result.add_warning(f"Isolated entity: {node_id}")

    if graph.depths_stale:
        result.add_warning("Depths are stale; recompute after mutating the graph")

    result.add_info(f"{len(graph)} entities, {graph.edge_count} dependencies")
    return result
