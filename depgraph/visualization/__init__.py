"""
depgraph Visualization Module

Neutral node/edge records for external renderers.
"""

from .exporter import (
    LayoutAlgorithm,
    EdgeType,
    LayoutConfig,
    VisualizationNode,
    VisualizationEdge,
    VisualizationData,
    VisualizationExporter,
    export_visualization,
)

__all__ = [
    "LayoutAlgorithm",
    "EdgeType",
    "LayoutConfig",
    "VisualizationNode",
    "VisualizationEdge",
    "VisualizationData",
    "VisualizationExporter",
    "export_visualization",
]
