"""
Graph Builder

Builds DependencyGraph instances from a registry snapshot and a resolver:
- Python mappings (ID -> metadata)
- Lists of metadata records keyed by a key function
- JSON and YAML registry files

Features:
- Resolver failures recovered per entity and reported as diagnostics
- Unknown references dropped, never errors
- Bidirectional edges (dependencies <-> dependents)
- Depth calculation from dependency-free roots
"""

import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .graph_model import (
    BuildDiagnostic, BuildOutcome, DependencyGraph, DependencyNode, DiagnosticKind
)
from .resolvers import Resolver, default_resolver, template_id

logger = logging.getLogger(__name__)

Registry = Union[Mapping[str, Any], Iterable[Any]]


# =============================================================================
# Depth Calculator
# =============================================================================

def compute_depths(graph: Union[DependencyGraph, Dict[str, DependencyNode]]) -> None:
    """
    Compute every node's depth in place.

    Breadth-first walk along ``dependents`` starting from the roots at
    depth 0. Each node keeps the largest depth offered to it and is queued
    once, after all of its dependencies have been dequeued, so a node
    reachable from several roots ends at ``1 + max(depth of dependencies)``.
    Nodes on or behind a cycle are never queued and keep the largest offer
    they received, which is only a lower bound.
    """
    nodes = graph.nodes if isinstance(graph, DependencyGraph) else graph

    pending: Dict[str, int] = {}
    queue: deque = deque()
    for node_id, node in nodes.items():
        node.depth = 0
        # Dangling references would never be released
        pending[node_id] = sum(1 for dep_id in node.dependencies if dep_id in nodes)
        if pending[node_id] == 0:
            queue.append(node_id)

    while queue:
        node_id = queue.popleft()
        depth = nodes[node_id].depth
        for dependent_id in sorted(nodes[node_id].dependents):
            dependent = nodes.get(dependent_id)
            if dependent is None:
                continue
            if depth + 1 > dependent.depth:
                dependent.depth = depth + 1
            pending[dependent_id] -= 1
            if pending[dependent_id] == 0:
                queue.append(dependent_id)

    if isinstance(graph, DependencyGraph):
        graph.depths_stale = False


# =============================================================================
# Registry Loading
# =============================================================================

def normalize_registry(registry: Registry,
                       key: Callable[[Any], str] = template_id) -> Dict[str, Any]:
    """
    Turn a registry snapshot into an ID -> metadata dict.

    Args:
        registry: Mapping of ID -> metadata, or an iterable of metadata records
        key: Function deriving the ID of a record (used for iterables only)

    Raises:
        ValueError: If two records share an ID
    """
    if isinstance(registry, Mapping):
        return dict(registry)

    entries: Dict[str, Any] = {}
    for record in registry:
        entity_id = key(record)
        if entity_id in entries:
            raise ValueError(f"Duplicate entity ID in registry: {entity_id}")
        entries[entity_id] = record
    return entries


def load_registry(filepath: Union[str, Path],
                  key: Callable[[Any], str] = template_id) -> Dict[str, Any]:
    """
    Load a registry snapshot from a JSON or YAML file.

    The file may hold a mapping of ID -> metadata, a list of metadata
    records, or either of those under an ``entities`` key.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is not supported
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    ext = path.suffix.lower()
    logger.info(f"Loading registry from {path}")

    with open(path, 'r', encoding='utf-8') as f:
        if ext in ('.yaml', '.yml'):
            import yaml
            data = yaml.safe_load(f)
        elif ext == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported registry format: {ext or path.name}")

    if isinstance(data, dict) and 'entities' in data:
        data = data['entities']
    if data is None:
        return {}
    if not isinstance(data, (dict, list)):
        raise ValueError(f"Registry file must hold a mapping or a list, got {type(data).__name__}")
    return normalize_registry(data, key=key)


# =============================================================================
# Graph Builder
# =============================================================================

class GraphBuilder:
    """
    Builds a DependencyGraph from a registry snapshot and a resolver.

    The build is total over a well-formed registry: a resolver raising for
    one entity only costs that entity its edges.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def build(self, registry: Registry, resolver: Resolver = default_resolver,
              key: Callable[[Any], str] = template_id) -> BuildOutcome:
        """
        Build a graph

        Args:
            registry: ID -> metadata mapping (or a list of records)
            resolver: Callable returning the raw dependency IDs of one entity
            key: ID function for list registries

        Returns:
            BuildOutcome with the graph and any diagnostics
        """
        entries = normalize_registry(registry, key=key)
        graph = DependencyGraph()
        diagnostics: List[BuildDiagnostic] = []

        # 1. One node per entry
        for entity_id, metadata in entries.items():
            graph.nodes[entity_id] = DependencyNode(id=entity_id, metadata=metadata)

        # 2. Resolve and mirror edges
        for entity_id, node in graph.nodes.items():
            raw = self._resolve(entity_id, node.metadata, resolver, diagnostics)
            for dep_id in raw:
                if dep_id not in graph.nodes:
                    self.logger.debug(f"Dropping unknown reference {entity_id} -> {dep_id}")
                    diagnostics.append(BuildDiagnostic(
                        kind=DiagnosticKind.UNKNOWN_REFERENCE,
                        entity_id=entity_id,
                        message=f"{entity_id} references unknown entity {dep_id}",
                        reference=dep_id,
                    ))
                    continue
                node.dependencies.add(dep_id)
                graph.nodes[dep_id].dependents.add(entity_id)

        # 3. Depths
        compute_depths(graph)

        outcome = BuildOutcome(graph=graph, diagnostics=diagnostics)
        self.logger.info(
            f"Built dependency graph: {len(graph)} nodes, {graph.edge_count} edges, "
            f"{len(graph.roots)} roots, {len(graph.leaves)} leaves"
        )
        if outcome.failures:
            self.logger.warning(
                f"Resolver failed for {len(outcome.failures)} entities: "
                f"{', '.join(outcome.failed_entities)}"
            )
        return outcome

    def _resolve(self, entity_id: str, metadata: Any, resolver: Resolver,
                 diagnostics: List[BuildDiagnostic]) -> List[str]:
        """Run the resolver for one entity, converting failures to diagnostics"""
        try:
            raw = resolver(metadata)
            if raw is None:
                return []
            if isinstance(raw, str):
                return [raw]
            return list(dict.fromkeys(raw))
        except Exception as exc:
            self.logger.warning(f"Resolver failed for {entity_id}: {exc}")
            diagnostics.append(BuildDiagnostic(
                kind=DiagnosticKind.RESOLVER_FAILURE,
                entity_id=entity_id,
                message=f"{type(exc).__name__}: {exc}",
            ))
            return []

    def build_from_file(self, filepath: Union[str, Path],
                        resolver: Resolver = default_resolver,
                        key: Callable[[Any], str] = template_id) -> BuildOutcome:
        """Build from a JSON or YAML registry file"""
        self.logger.info(f"Building graph from file: {filepath}")
        return self.build(load_registry(filepath, key=key), resolver=resolver)


def build_graph(registry: Registry, resolver: Resolver = default_resolver,
                key: Optional[Callable[[Any], str]] = None) -> BuildOutcome:
    """Build a graph with a fresh GraphBuilder"""
    return GraphBuilder().build(registry, resolver=resolver, key=key or template_id)
