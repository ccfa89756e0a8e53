"""
Graph visualizer that produces the shape list drawn on the leaflet map.

This implementation uses NetworkX to assemble the drawable graph, but the output
is a plain dict of markers and lines which map_view turns into leaflet layers.

The color system is a pure function of (label presence, pending selection):
- unlabeled nodes are blue, labeled nodes red
- the single pending endpoint of an in-progress edge is yellow
"""

from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from graphmap.edit.constants import (
    EDGE_COLOR,
    EDGE_DASH_ARRAY,
    LABELED_COLOR,
    NODE_RADIUS,
    PENDING_COLOR,
    UNLABELED_COLOR,
)
from graphmap.graph_store import Edge, Node


def label_color(label: Optional[str]) -> str:
    """Color a node shows when it is not pending."""
    return LABELED_COLOR if label else UNLABELED_COLOR


def node_color(node: Node, pending_id: Optional[str] = None) -> str:
    if pending_id is not None and node.id == pending_id:
        return PENDING_COLOR
    return label_color(node.label)


class GraphVisualizer:
    """
    Build the render state (dict) for the map based on nodes and edges.

    The returned dict looks like:
      {
        "nodes": [
          {"id": ..., "latlng": [lat, lng], "label": ..., "color": ..., "radius": 8}
        ],
        "edges": [
          {"id": ..., "node1": ..., "node2": ...,
           "positions": [[lat, lng], [lat, lng]], "color": "black", "dashArray": "5,5"}
        ]
      }

    Edges whose endpoints do not resolve to nodes are left out.
    """

    def __init__(self):
        # MultiGraph: parallel edges between the same pair are allowed
        self.G = nx.MultiGraph()

    def build(self, nodes: Iterable[Node], edges: Iterable[Edge],
              pending_id: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
        self.G = nx.MultiGraph()

        for node in nodes:
            self.G.add_node(
                node.id,
                latlng=node.position.as_list(),
                label=node.label,
                color=node_color(node, pending_id),
            )

        drawable = []
        for edge in edges:
            # Only add edges if both nodes exist
            if edge.node1 in self.G.nodes and edge.node2 in self.G.nodes:
                self.G.add_edge(edge.node1, edge.node2, key=edge.id)
                drawable.append(edge)

        render_nodes = []
        for node_id, attrs in self.G.nodes(data=True):
            render_nodes.append({
                "id": node_id,
                "latlng": attrs["latlng"],
                "label": attrs["label"],
                "color": attrs["color"],
                "radius": NODE_RADIUS,
            })

        render_edges = []
        for edge in drawable:
            render_edges.append({
                "id": edge.id,
                "node1": edge.node1,
                "node2": edge.node2,
                "positions": [self.G.nodes[edge.node1]["latlng"], self.G.nodes[edge.node2]["latlng"]],
                "color": EDGE_COLOR,
                "dashArray": EDGE_DASH_ARRAY,
            })

        return {"nodes": render_nodes, "edges": render_edges}
