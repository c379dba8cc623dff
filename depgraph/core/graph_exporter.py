"""
Graph Exporter

Exports dependency graphs and analysis results to interchange formats:
- JSON (graph, analysis result, or visualization data)
- GraphML (for Gephi, yEd, NetworkX)
- GEXF (for Gephi, Sigma.js)
- NetworkX (direct DiGraph object)

Edges point from the dependent to its dependency, matching
``DependencyNode.dependencies``.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

import networkx as nx

from .graph_model import DependencyAnalysisResult, DependencyGraph

__version__ = "1.0"


class GraphExporter:
    """Exports DependencyGraph instances to various formats"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def to_networkx(self, graph: DependencyGraph,
                    in_cycle: Optional[set] = None) -> nx.DiGraph:
        """
        Convert to a NetworkX DiGraph.

        Node attributes: depth, node_type, in_cycle. Metadata is not copied.
        """
        in_cycle = in_cycle or set()
        G = nx.DiGraph()
        for node_id, node in graph.nodes.items():
            G.add_node(
                node_id,
                depth=node.depth,
                node_type=node.node_type.value,
                in_cycle=node_id in in_cycle,
            )
        G.add_edges_from(graph.edges())
        return G

    def export_to_json(self, data: Union[DependencyGraph, DependencyAnalysisResult, Any],
                       filepath: str, indent: int = 2) -> str:
        """Export anything with a ``to_dict()`` to a JSON file"""
        self.logger.info(f"Exporting to JSON: {filepath}")

        payload = data.to_dict()
        payload['_export'] = {
            'format': 'json',
            'exported_at': datetime.now(timezone.utc).isoformat(),
            'exporter_version': __version__,
        }

        path = self._prepare(filepath)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=indent, default=str)
        return str(path)

    def export_to_graphml(self, graph: DependencyGraph, filepath: str,
                          in_cycle: Optional[set] = None) -> str:
        self.logger.info(f"Exporting to GraphML: {filepath}")
        path = self._prepare(filepath)
        nx.write_graphml(self.to_networkx(graph, in_cycle), str(path))
        return str(path)

    def export_to_gexf(self, graph: DependencyGraph, filepath: str,
                       in_cycle: Optional[set] = None) -> str:
        self.logger.info(f"Exporting to GEXF: {filepath}")
        path = self._prepare(filepath)
        nx.write_gexf(self.to_networkx(graph, in_cycle), str(path))
        return str(path)

    def _prepare(self, filepath: str) -> Path:
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
