"""
Topological Sorter

Load orders for a DependencyGraph:
- topological_order: Kahn's algorithm over the whole graph, dependencies
  first, ``None`` when a cycle prevents a complete order
- load_order: dependency-first order for a subset of entities, skipping
  cyclic back-edges instead of failing
"""

import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from ..core.graph_model import DependencyGraph

logger = logging.getLogger(__name__)


def topological_order(graph: DependencyGraph) -> Optional[List[str]]:
    """
    Order all entities so every entity comes after everything it depends on.

    Roots are emitted in registry order; newly released dependents follow
    in sorted order, so the result is deterministic for a given registry.

    Returns:
        The load order, or None if the graph contains a cycle
    """
    in_degree: Dict[str, int] = {}
    queue: deque = deque()
    for node_id, node in graph.nodes.items():
        in_degree[node_id] = len(node.dependencies)
        if in_degree[node_id] == 0:
            queue.append(node_id)

    result: List[str] = []
    while queue:
        node_id = queue.popleft()
        result.append(node_id)
        for dependent_id in sorted(graph.nodes[node_id].dependents):
            in_degree[dependent_id] -= 1
            if in_degree[dependent_id] == 0:
                queue.append(dependent_id)

    if len(result) < len(graph.nodes):
        logger.info(
            f"No topological order: {len(graph.nodes) - len(result)} entities are "
            f"on or behind a cycle"
        )
        return None
    return result


def load_order(graph: DependencyGraph, entity_ids: Iterable[str]) -> List[str]:
    """
    Dependency-first order for the given entities and everything they need.

    Unknown IDs are ignored. An edge back into an entity that is still
    being visited is skipped, so cyclic input yields a best-effort order
    rather than no order.
    """
    order: List[str] = []
    done: Set[str] = set()
    visiting: Set[str] = set()

    for start in entity_ids:
        if start in done or start not in graph.nodes:
            continue

        visiting.add(start)
        stack = [(start, iter(sorted(graph.nodes[start].dependencies)))]
        while stack:
            node_id, pending = stack[-1]
            descended = False
            for dep_id in pending:
                if dep_id in done or dep_id in visiting or dep_id not in graph.nodes:
                    continue
                visiting.add(dep_id)
                stack.append((dep_id, iter(sorted(graph.nodes[dep_id].dependencies))))
                descended = True
                break
            if not descended:
                stack.pop()
                visiting.discard(node_id)
                done.add(node_id)
                order.append(node_id)

    return order
