"""
Incremental Mutator

Edits a live DependencyGraph one edge at a time without a rebuild.

Every operation keeps the bidirectional invariant
(``B in A.dependencies`` <=> ``A in B.dependents``), is a no-op when there
is nothing to change, and marks depths stale instead of recomputing them.
Cycle checks are left to the caller.
"""

import logging
from typing import Any, Iterable

from .graph_model import DependencyGraph

logger = logging.getLogger(__name__)


def add_dependency(graph: DependencyGraph, from_id: str, to_id: str,
                   metadata: Any = None) -> bool:
    """
    Record that ``from_id`` depends on ``to_id``.

    Missing nodes are created on demand. Returns True if the edge is new.
    """
    source = graph.add_node(from_id, metadata)
    target = graph.add_node(to_id)

    if to_id in source.dependencies:
        return False

    source.dependencies.add(to_id)
    target.dependents.add(from_id)
    graph.depths_stale = True
    logger.debug(f"Added dependency {from_id} -> {to_id}")
    return True


def remove_dependency(graph: DependencyGraph, from_id: str, to_id: str) -> bool:
    """
    Remove the edge ``from_id -> to_id``.

    Nodes stay in the graph even when they end up isolated. Returns True if
    an edge was removed.
    """
    source = graph.get_node(from_id)
    target = graph.get_node(to_id)
    if source is None or target is None or to_id not in source.dependencies:
        return False

    source.dependencies.discard(to_id)
    target.dependents.discard(from_id)
    graph.depths_stale = True
    logger.debug(f"Removed dependency {from_id} -> {to_id}")
    return True


def set_dependencies(graph: DependencyGraph, node_id: str,
                     dependency_ids: Iterable[str], metadata: Any = None) -> bool:
    """
    Replace the outgoing edges of ``node_id``.

    Creates the node and any new targets when absent. Returns True if the
    edge set changed.
    """
    node = graph.add_node(node_id, metadata)
    wanted = set(dependency_ids)
    changed = False

    for dep_id in sorted(node.dependencies - wanted):
        changed = remove_dependency(graph, node_id, dep_id) or changed
    for dep_id in sorted(wanted - node.dependencies):
        changed = add_dependency(graph, node_id, dep_id) or changed
    return changed


def remove_node(graph: DependencyGraph, node_id: str) -> bool:
    """Purge a node and strip it from its neighbours' edge sets"""
    node = graph.nodes.pop(node_id, None)
    if node is None:
        return False

    for dep_id in node.dependencies:
        target = graph.get_node(dep_id)
        if target is not None:
            target.dependents.discard(node_id)
    for dependent_id in node.dependents:
        source = graph.get_node(dependent_id)
        if source is not None:
            source.dependencies.discard(node_id)

    graph.depths_stale = True
    logger.debug(f"Removed node {node_id}")
    return True


def clear(graph: DependencyGraph) -> None:
    """Drop every node"""
    graph.nodes.clear()
    graph.depths_stale = False
