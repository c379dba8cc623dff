"""
Chain Tracer

Path queries over a DependencyGraph:
- dependency_chain: every root-to-target path
- transitive_dependencies / transitive_dependents: reachability sets
- dependency_tree: nested view of an entity's dependencies
"""

import logging
from collections import deque
from typing import Any, Dict, List, Optional, Set

from ..core.graph_model import DependencyGraph

logger = logging.getLogger(__name__)


def dependency_chain(graph: DependencyGraph, target_id: str,
                     limit: Optional[int] = None) -> List[List[str]]:
    """
    Enumerate every chain from a root down to ``target_id``.

    The search walks backward from the target through ``dependencies``.
    Only the current path counts as visited, so a node that ended one chain
    can still appear in another; a branch that would revisit a node already
    on its own path is abandoned.

    Args:
        graph: Graph to search
        target_id: Entity whose chains are wanted
        limit: Stop after this many chains

    Returns:
        Chains ordered root first, each ending with ``target_id``; ``[]`` for
        an unknown target
    """
    if target_id not in graph.nodes:
        return []

    chains: List[List[str]] = []
    if limit is not None and limit <= 0:
        return chains

    if not graph.nodes[target_id].dependencies:
        return [[target_id]]

    path: List[str] = [target_id]
    on_path: Set[str] = {target_id}
    stack = [iter(sorted(graph.nodes[target_id].dependencies))]

    while stack:
        pending = stack[-1]
        advanced = False

        for dep_id in pending:
            if dep_id in on_path or dep_id not in graph.nodes:
                continue
            dependencies = graph.nodes[dep_id].dependencies
            if not dependencies:
                chains.append([dep_id] + path[::-1])
                if limit is not None and len(chains) >= limit:
                    return chains
                continue
            path.append(dep_id)
            on_path.add(dep_id)
            stack.append(iter(sorted(dependencies)))
            advanced = True
            break

        if not advanced:
            stack.pop()
            on_path.discard(path.pop())

    return chains


def _reachable(graph: DependencyGraph, start_id: str, attr: str) -> Set[str]:
    if start_id not in graph.nodes:
        return set()

    seen: Set[str] = set()
    queue = deque([start_id])
    while queue:
        node_id = queue.popleft()
        for next_id in getattr(graph.nodes[node_id], attr):
            if next_id not in seen and next_id in graph.nodes:
                seen.add(next_id)
                queue.append(next_id)
    return seen


def transitive_dependencies(graph: DependencyGraph, node_id: str) -> Set[str]:
    """Everything ``node_id`` needs, directly or indirectly"""
    return _reachable(graph, node_id, 'dependencies')


def transitive_dependents(graph: DependencyGraph, node_id: str) -> Set[str]:
    """Everything that needs ``node_id``, directly or indirectly"""
    return _reachable(graph, node_id, 'dependents')


def dependency_tree(graph: DependencyGraph, node_id: str,
                    max_depth: int = 10) -> Optional[Dict[str, Any]]:
    """
    Nested dict view of an entity's dependencies.

    Each entity is expanded once; later references to it, and anything
    below ``max_depth``, appear as ``{'id': ..., 'truncated': True}``.
    Returns None for an unknown entity.
    """
    if node_id not in graph.nodes:
        return None

    expanded: Set[str] = set()

    def build(current_id: str, level: int) -> Dict[str, Any]:
        if level > max_depth or current_id in expanded:
            return {'id': current_id, 'truncated': True}
        expanded.add(current_id)

        node = graph.nodes[current_id]
        return {
            'id': current_id,
            'depth': node.depth,
            'dependencies': [
                build(dep_id, level + 1)
                for dep_id in sorted(node.dependencies)
                if dep_id in graph.nodes
            ],
        }

    return build(node_id, 0)
