"""
Graph file format for GraphMap.

Saved files are plain JSON:
{
  "nodes": [
    {"id": "node-...", "latlng": {"lat": 28.6, "lng": -81.2}, "label": "Library"}
  ],
  "edges": [
    {"id": "edge-...", "node1": "node-...", "node2": "node-..."}
  ]
}

Colors are never written; on load they are re-derived from the label, and
any legacy "color" field is ignored.
"""

import json
import math
import logging
from numbers import Real
from typing import Any, Dict, List, Sequence, Tuple

from graphmap.errors import FormatError
from graphmap.graph_store import Edge, LatLng, Node

logger = logging.getLogger(__name__)

GRAPH_FILENAME = "graph_data.json"
GRAPH_MEDIA_TYPE = "application/json"


def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise FormatError(f"{where} is missing '{key}'")
    return obj[key]


def _as_coordinate(value: Any, where: str) -> float:
    # bool is a subclass of int; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, Real):
        raise FormatError(f"{where} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise FormatError(f"{where} must be finite, got {value!r}")
    return float(value)


def _as_id(value: Any, where: str) -> str:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise FormatError(f"{where} must be a string id, got {value!r}")
    return str(value)


class GraphSerializer:
    """Converts graph collections to and from the saved JSON text."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def node_to_dict(self, node: Node) -> Dict[str, Any]:
        return {
            "id": node.id,
            "latlng": {"lat": node.position.lat, "lng": node.position.lng},
            "label": node.label,
        }

    def edge_to_dict(self, edge: Edge) -> Dict[str, Any]:
        return {"id": edge.id, "node1": edge.node1, "node2": edge.node2}

    def serialize(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> str:
        data = {
            "nodes": [self.node_to_dict(n) for n in nodes],
            "edges": [self.edge_to_dict(e) for e in edges],
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False, allow_nan=False)

    def node_from_dict(self, raw: Any, index: int) -> Node:
        where = f"nodes[{index}]"
        if not isinstance(raw, dict):
            raise FormatError(f"{where} must be an object")

        node_id = _as_id(_require(raw, "id", where), f"{where}.id")
        latlng = _require(raw, "latlng", where)
        if not isinstance(latlng, dict):
            raise FormatError(f"{where}.latlng must be an object")
        lat = _as_coordinate(_require(latlng, "lat", f"{where}.latlng"), f"{where}.latlng.lat")
        lng = _as_coordinate(_require(latlng, "lng", f"{where}.latlng"), f"{where}.latlng.lng")

        label = raw.get("label")
        if label is None:
            label = ""
        elif not isinstance(label, str):
            raise FormatError(f"{where}.label must be text, got {label!r}")

        return Node(id=node_id, position=LatLng(lat, lng), label=label)

    def edge_from_dict(self, raw: Any, index: int) -> Edge:
        where = f"edges[{index}]"
        if not isinstance(raw, dict):
            raise FormatError(f"{where} must be an object")
        return Edge(
            id=_as_id(_require(raw, "id", where), f"{where}.id"),
            node1=_as_id(_require(raw, "node1", where), f"{where}.node1"),
            node2=_as_id(_require(raw, "node2", where), f"{where}.node2"),
        )

    def deserialize(self, text: str) -> Tuple[List[Node], List[Edge]]:
        """
        Parse saved text back into nodes and edges.

        Edge endpoints are NOT checked against the node list; dangling edges
        are kept and simply skipped at render time.

        Raises:
            FormatError: if text is not JSON or lacks the expected structure
        """
        try:
            data = json.loads(text)
        except (ValueError, TypeError, RecursionError) as e:
            raise FormatError(f"Not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FormatError("Graph file must contain a JSON object")

        raw_nodes = _require(data, "nodes", "graph")
        raw_edges = _require(data, "edges", "graph")
        if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
            raise FormatError("'nodes' and 'edges' must be lists")

        nodes = [self.node_from_dict(raw, i) for i, raw in enumerate(raw_nodes)]
        edges = [self.edge_from_dict(raw, i) for i, raw in enumerate(raw_edges)]
        logger.debug(f"Parsed {len(nodes)} node(s) and {len(edges)} edge(s)")
        return nodes, edges
