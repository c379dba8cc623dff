"""
Cycle Detector

Depth-first search with a recursion stack ("gray set") over every node of a
DependencyGraph. A dependency that is currently on the stack closes a loop;
the DFS path from that dependency back to itself is reported as a
CircularDependency.

- All nodes are scanned, so pure cycles without any root are found
- Self-loops are ordinary back-edges and yield one-node cycles
- Every back-edge found yields its own cycle, so overlapping loops that
  share nodes are reported separately
- The walk is iterative; deep graphs do not hit the recursion limit
"""

import logging
from typing import Iterable, List, Set, Tuple

from ..core.graph_model import CircularDependency, DependencyGraph

logger = logging.getLogger(__name__)


def _scan(graph: DependencyGraph, starts: Iterable[str]) -> List[CircularDependency]:
    cycles: List[CircularDependency] = []
    seen_keys: Set[Tuple[str, ...]] = set()
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []
    position = {}

    for start in starts:
        if start in visited or start not in graph.nodes:
            continue

        visited.add(start)
        on_stack.add(start)
        position[start] = len(path)
        path.append(start)
        stack = [(start, iter(sorted(graph.nodes[start].dependencies)))]

        while stack:
            node_id, pending = stack[-1]
            advanced = False

            for dep_id in pending:
                if dep_id not in graph.nodes:
                    continue
                if dep_id in on_stack:
                    loop = path[position[dep_id]:]
                    cycle = CircularDependency(cycle=loop + [dep_id])
                    key = cycle.key()
                    if key not in seen_keys:
                        seen_keys.add(key)
                        cycles.append(cycle)
                        logger.debug(f"Cycle found: {' -> '.join(cycle.cycle)}")
                elif dep_id not in visited:
                    visited.add(dep_id)
                    on_stack.add(dep_id)
                    position[dep_id] = len(path)
                    path.append(dep_id)
                    stack.append((dep_id, iter(sorted(graph.nodes[dep_id].dependencies))))
                    advanced = True
                    break

            if not advanced:
                stack.pop()
                path.pop()
                on_stack.discard(node_id)
                del position[node_id]

    return cycles


def detect_cycles(graph: DependencyGraph) -> List[CircularDependency]:
    """
    Find the dependency cycles of a graph.

    Returns:
        One CircularDependency per distinct loop, in discovery order
    """
    cycles = _scan(graph, list(graph.nodes))
    if cycles:
        logger.info(f"Detected {len(cycles)} circular dependencies")
    return cycles


def find_cycles_from(graph: DependencyGraph, start_id: str) -> List[CircularDependency]:
    """Cycles reachable from one entity through its dependencies"""
    return _scan(graph, [start_id])


def has_cycles(graph: DependencyGraph) -> bool:
    return bool(_scan(graph, list(graph.nodes)))


def cycle_members(cycles: Iterable[CircularDependency]) -> Set[str]:
    """IDs that sit on at least one cycle"""
    members: Set[str] = set()
    for cycle in cycles:
        members.update(cycle.affected)
    return members


def cycle_edges(cycles: Iterable[CircularDependency]) -> Set[Tuple[str, str]]:
    """(dependent, dependency) pairs that lie on at least one cycle"""
    edges: Set[Tuple[str, str]] = set()
    for cycle in cycles:
        edges.update(cycle.edges())
    return edges


def format_cycle(cycle: CircularDependency, separator: str = ' -> ') -> str:
    return separator.join(cycle.cycle)
