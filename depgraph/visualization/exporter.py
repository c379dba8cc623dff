"""
Visualization Exporter

Maps a DependencyGraph into neutral node/edge records that a front end
(D3.js, ECharts, vis.js, ...) can render directly.

Features:
- Node classification (root, intermediate, leaf, isolated)
- Cycle highlighting on nodes and edges
- Size hint from edge counts
- Layout hints (force, hierarchical, circular, tree)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..analysis.cycle_detector import cycle_edges, cycle_members, detect_cycles
from ..core.graph_model import CircularDependency, DependencyGraph, DependencyNode, NodeType


# =============================================================================
# Enums and Constants
# =============================================================================

class LayoutAlgorithm(str, Enum):
    """Layout algorithms a renderer may apply"""
    FORCE = "force"
    HIERARCHICAL = "hierarchical"
    CIRCULAR = "circular"
    TREE = "tree"


class EdgeType(str, Enum):
    NORMAL = "normal"
    CIRCULAR = "circular"


CYCLE_COLOR = "#f44336"

NODE_COLORS = {
    NodeType.ROOT: "#4CAF50",          # Green
    NodeType.LEAF: "#2196F3",          # Blue
    NodeType.ISOLATED: "#9E9E9E",      # Gray
    NodeType.INTERMEDIATE: "#FF9800",  # Orange
}


# =============================================================================
# Records
# =============================================================================

@dataclass
class LayoutConfig:
    algorithm: LayoutAlgorithm = LayoutAlgorithm.FORCE
    node_spacing: int = 50
    level_spacing: Optional[int] = 100

    def to_dict(self) -> Dict[str, Any]:
        data = {'algorithm': self.algorithm.value, 'nodeSpacing': self.node_spacing}
        if self.level_spacing is not None:
            data['levelSpacing'] = self.level_spacing
        return data


@dataclass
class VisualizationNode:
    id: str
    label: str
    type: NodeType
    size: int
    color: str
    in_cycle: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'type': self.type.value,
            'size': self.size,
            'color': self.color,
            'inCycle': self.in_cycle,
            'metadata': self.metadata,
        }


@dataclass
class VisualizationEdge:
    source: str
    target: str
    type: EdgeType = EdgeType.NORMAL
    weight: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': self.source,
            'target': self.target,
            'type': self.type.value,
            'weight': self.weight,
        }


@dataclass
class VisualizationData:
    nodes: List[VisualizationNode] = field(default_factory=list)
    edges: List[VisualizationEdge] = field(default_factory=list)
    layout: Optional[LayoutConfig] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [e.to_dict() for e in self.edges],
        }
        if self.layout is not None:
            data['layout'] = self.layout.to_dict()
        return data


# =============================================================================
# Exporter
# =============================================================================

def node_label(node: DependencyNode) -> str:
    """Display name from metadata, falling back to the ID"""
    metadata = node.metadata
    for key in ('displayName', 'display_name', 'name'):
        if isinstance(metadata, dict):
            value = metadata.get(key)
        else:
            value = getattr(metadata, key, None)
        if value:
            return str(value)
    return node.id


def node_size(node: DependencyNode) -> int:
    return (len(node.dependencies) + len(node.dependents)) * 5 + 10


class VisualizationExporter:
    """Converts a DependencyGraph into VisualizationData"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def export(self, graph: DependencyGraph,
               cycles: Optional[List[CircularDependency]] = None,
               layout: Any = LayoutAlgorithm.FORCE) -> VisualizationData:
        """
        Export a graph.

        Args:
            graph: Graph to export
            cycles: Previously detected cycles; detected here when omitted
            layout: LayoutAlgorithm (or its name), LayoutConfig, or None
        """
        if cycles is None:
            cycles = detect_cycles(graph)
        members = cycle_members(cycles)
        loop_edges = cycle_edges(cycles)

        data = VisualizationData(layout=self._layout(layout))

        for node_id, node in graph.nodes.items():
            node_type = node.node_type
            in_cycle = node_id in members
            data.nodes.append(VisualizationNode(
                id=node_id,
                label=node_label(node),
                type=node_type,
                size=node_size(node),
                color=CYCLE_COLOR if in_cycle else NODE_COLORS[node_type],
                in_cycle=in_cycle,
                metadata={
                    'depth': node.depth,
                    'dependencyCount': len(node.dependencies),
                    'dependentCount': len(node.dependents),
                },
            ))

        for source, target in graph.edges():
            circular = (source, target) in loop_edges
            data.edges.append(VisualizationEdge(
                source=source,
                target=target,
                type=EdgeType.CIRCULAR if circular else EdgeType.NORMAL,
            ))

        self.logger.debug(
            f"Exported {len(data.nodes)} nodes and {len(data.edges)} edges "
            f"({len(loop_edges)} circular)"
        )
        return data

    def _layout(self, layout: Any) -> Optional[LayoutConfig]:
        if layout is None or isinstance(layout, LayoutConfig):
            return layout
        return LayoutConfig(algorithm=LayoutAlgorithm(layout))


def export_visualization(graph: DependencyGraph,
                         cycles: Optional[List[CircularDependency]] = None,
                         layout: Any = LayoutAlgorithm.FORCE) -> VisualizationData:
    return VisualizationExporter().export(graph, cycles=cycles, layout=layout)
