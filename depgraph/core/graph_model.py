"""
Graph Model

Data structures for the dependency graph engine:

Nodes:
- DependencyNode: {id, metadata, dependencies, dependents, depth}

Aggregates:
- DependencyGraph: arena of nodes keyed by ID, edges stored as ID sets
- CircularDependency: one detected loop
- DependencyStatistics: aggregate metrics
- DependencyAnalysisResult: graph + cycles + load order + statistics

Build results:
- BuildDiagnostic / BuildOutcome: explicit success/partial outcome of a
  graph build, carrying resolver failures and dropped references
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple


# =============================================================================
# Enumerations
# =============================================================================

class NodeType(str, Enum):
    """Structural role of a node in the graph"""
    ROOT = "root"
    INTERMEDIATE = "intermediate"
    LEAF = "leaf"
    ISOLATED = "isolated"


class DiagnosticKind(str, Enum):
    """Kinds of non-fatal findings reported while building a graph"""
    RESOLVER_FAILURE = "resolver_failure"
    UNKNOWN_REFERENCE = "unknown_reference"


class BuildStatus(str, Enum):
    """Overall outcome of a graph build"""
    SUCCESS = "success"
    PARTIAL = "partial"


# =============================================================================
# Nodes
# =============================================================================

@dataclass
class DependencyNode:
    """
    One entity in the dependency graph.

    Attributes:
        id: Unique key of the entity
        metadata: Opaque descriptive data supplied by the registry
        dependencies: IDs this node depends on (outgoing edges)
        dependents: IDs that depend on this node (incoming edges)
        depth: Longest distance from a dependency-free root
    """
    id: str
    metadata: Any = None
    dependencies: Set[str] = field(default_factory=set)
    dependents: Set[str] = field(default_factory=set)
    depth: int = 0

    @property
    def is_root(self) -> bool:
        return not self.dependencies

    @property
    def is_leaf(self) -> bool:
        return not self.dependents

    @property
    def is_isolated(self) -> bool:
        return not self.dependencies and not self.dependents

    @property
    def node_type(self) -> NodeType:
        if self.is_isolated:
            return NodeType.ISOLATED
        if self.is_root:
            return NodeType.ROOT
        if self.is_leaf:
            return NodeType.LEAF
        return NodeType.INTERMEDIATE

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'dependencies': sorted(self.dependencies),
            'dependents': sorted(self.dependents),
            'depth': self.depth,
            'type': self.node_type.value,
        }


# =============================================================================
# Graph
# =============================================================================

class DependencyGraph:
    """
    Arena of dependency nodes keyed by ID.

    Edges live only in the nodes' ``dependencies``/``dependents`` sets, so
    roots, leaves and the edge count are derived on access and always agree
    with them. Depth values are stored on the nodes and go stale whenever an
    edge changes; ``depths_stale`` tracks that.
    """

    def __init__(self, nodes: Optional[Dict[str, DependencyNode]] = None):
        self.nodes: Dict[str, DependencyNode] = nodes if nodes is not None else {}
        self.depths_stale: bool = False

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self.nodes)}, edges={self.edge_count})"

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> List[str]:
        """IDs with no dependencies, in registry order"""
        return [node_id for node_id, node in self.nodes.items() if not node.dependencies]

    @property
    def leaves(self) -> List[str]:
        """IDs nothing depends on, in registry order"""
        return [node_id for node_id, node in self.nodes.items() if not node.dependents]

    @property
    def edge_count(self) -> int:
        return sum(len(node.dependencies) for node in self.nodes.values())

    def get_node(self, node_id: str) -> Optional[DependencyNode]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def add_node(self, node_id: str, metadata: Any = None) -> DependencyNode:
        """Return the node for ``node_id``, creating it when absent"""
        node = self.nodes.get(node_id)
        if node is None:
            node = DependencyNode(id=node_id, metadata=metadata)
            self.nodes[node_id] = node
        return node

    def edges(self) -> List[Tuple[str, str]]:
        """All (dependent, dependency) pairs, grouped by source in registry order"""
        return [
            (node_id, dep_id)
            for node_id, node in self.nodes.items()
            for dep_id in sorted(node.dependencies)
        ]

    def check_consistency(self) -> List[str]:
        """
        Check the bidirectional-reference invariant.

        Returns:
            Human readable violations; empty when the graph is consistent
        """
        problems = []
        for node_id, node in self.nodes.items():
            for dep_id in sorted(node.dependencies):
                target = self.nodes.get(dep_id)
                if target is None:
                    problems.append(f"{node_id} depends on missing node {dep_id}")
                elif node_id not in target.dependents:
                    problems.append(f"{dep_id} does not list {node_id} as a dependent")
            for dependent_id in sorted(node.dependents):
                source = self.nodes.get(dependent_id)
                if source is None:
                    problems.append(f"{node_id} lists missing dependent {dependent_id}")
                elif node_id not in source.dependencies:
                    problems.append(f"{dependent_id} does not list {node_id} as a dependency")
        return problems

    def copy(self) -> 'DependencyGraph':
        """Copy nodes and edge sets; metadata is shared, not copied"""
        clone = DependencyGraph({
            node_id: DependencyNode(
                id=node.id,
                metadata=node.metadata,
                dependencies=set(node.dependencies),
                dependents=set(node.dependents),
                depth=node.depth,
            )
            for node_id, node in self.nodes.items()
        })
        clone.depths_stale = self.depths_stale
        return clone

    def to_dict(self) -> Dict:
        return {
            'nodes': [node.to_dict() for node in self.nodes.values()],
            'roots': self.roots,
            'leaves': self.leaves,
            'edge_count': self.edge_count,
        }


# =============================================================================
# Analysis Records
# =============================================================================

@dataclass
class CircularDependency:
    """A closed dependency loop; ``cycle`` repeats its first ID at the end"""
    cycle: List[str]
    size: int = 0
    affected: List[str] = field(default_factory=list)

    def __post_init__(self):
        loop = self.cycle[:-1] if len(self.cycle) > 1 else list(self.cycle)
        if not self.affected:
            self.affected = list(dict.fromkeys(loop))
        if not self.size:
            self.size = len(self.affected)

    def edges(self) -> List[Tuple[str, str]]:
        return list(zip(self.cycle, self.cycle[1:]))

    def key(self) -> Tuple[str, ...]:
        """Rotation-independent identity of the loop"""
        loop = self.cycle[:-1]
        if not loop:
            return ()
        start = loop.index(min(loop))
        return tuple(loop[start:] + loop[:start])

    def to_dict(self) -> Dict:
        return {
            'cycle': self.cycle,
            'size': self.size,
            'affected': self.affected,
        }


@dataclass
class DependencyStatistics:
    """Aggregate metrics over a dependency graph"""
    total_nodes: int = 0
    nodes_with_dependencies: int = 0
    nodes_with_dependents: int = 0
    isolated_nodes: int = 0
    average_dependencies: float = 0.0
    max_depth: int = 0
    circular_dependencies: int = 0
    total_edges: int = 0

    def to_dict(self) -> Dict:
        return {
            'total_nodes': self.total_nodes,
            'nodes_with_dependencies': self.nodes_with_dependencies,
            'nodes_with_dependents': self.nodes_with_dependents,
            'isolated_nodes': self.isolated_nodes,
            'average_dependencies': round(self.average_dependencies, 4),
            'max_depth': self.max_depth,
            'circular_dependencies': self.circular_dependencies,
            'total_edges': self.total_edges,
        }


# =============================================================================
# Build Outcome
# =============================================================================

@dataclass
class BuildDiagnostic:
    """Non-fatal finding about one entity during a build"""
    kind: DiagnosticKind
    entity_id: str
    message: str
    reference: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.kind == DiagnosticKind.RESOLVER_FAILURE

    def to_dict(self) -> Dict:
        data = {
            'kind': self.kind.value,
            'entity_id': self.entity_id,
            'message': self.message,
        }
        if self.reference is not None:
            data['reference'] = self.reference
        return data


@dataclass
class BuildOutcome:
    """
    Result of building a graph from a registry.

    The graph is always complete over the registry; ``status`` is PARTIAL
    when at least one resolver failed and its entity was treated as
    dependency-free.
    """
    graph: DependencyGraph
    diagnostics: List[BuildDiagnostic] = field(default_factory=list)

    @property
    def status(self) -> BuildStatus:
        if any(d.is_failure for d in self.diagnostics):
            return BuildStatus.PARTIAL
        return BuildStatus.SUCCESS

    @property
    def ok(self) -> bool:
        return self.status == BuildStatus.SUCCESS

    @property
    def failures(self) -> List[BuildDiagnostic]:
        return [d for d in self.diagnostics if d.is_failure]

    @property
    def failed_entities(self) -> List[str]:
        return [d.entity_id for d in self.failures]

    @property
    def dropped_references(self) -> List[Tuple[str, str]]:
        return [
            (d.entity_id, d.reference)
            for d in self.diagnostics
            if d.kind == DiagnosticKind.UNKNOWN_REFERENCE
        ]

    def to_dict(self) -> Dict:
        return {
            'status': self.status.value,
            'diagnostics': [d.to_dict() for d in self.diagnostics],
        }


@dataclass
class DependencyAnalysisResult:
    """Complete analysis of one graph"""
    graph: DependencyGraph
    cycles: List[CircularDependency]
    topological_order: Optional[List[str]]
    statistics: DependencyStatistics
    diagnostics: List[BuildDiagnostic] = field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    @property
    def is_acyclic(self) -> bool:
        return self.topological_order is not None

    @property
    def failures(self) -> List[BuildDiagnostic]:
        return [d for d in self.diagnostics if d.is_failure]

    def to_dict(self) -> Dict:
        return {
            'graph': self.graph.to_dict(),
            'cycles': [c.to_dict() for c in self.cycles],
            'topological_order': self.topological_order,
            'statistics': self.statistics.to_dict(),
            'diagnostics': [d.to_dict() for d in self.diagnostics],
        }
