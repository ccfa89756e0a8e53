"""
Graph store for GraphMap.

Owns the authoritative node and edge collections of one editing session.

Structure:
- nodes: insertion-ordered, keyed by id ("node-<hex>")
- edges: insertion-ordered, keyed by id ("edge-<hex>"), each referencing two node ids

Colors are NOT part of the model; see graph_viz.node_color.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from graphmap.errors import GraphIntegrityError, SelfConnectionError, UnknownNodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatLng:
    """A geographic coordinate. Not range-checked."""
    lat: float
    lng: float

    def as_list(self) -> List[float]:
        return [self.lat, self.lng]


@dataclass(frozen=True)
class Node:
    id: str
    position: LatLng
    label: str = ""

    @property
    def has_label(self) -> bool:
        return bool(self.label)


@dataclass(frozen=True)
class Edge:
    id: str
    node1: str
    node2: str

    @property
    def endpoints(self) -> Tuple[str, str]:
        return (self.node1, self.node2)

    def touches(self, node_id: str) -> bool:
        return self.node1 == node_id or self.node2 == node_id


def new_node_id() -> str:
    return f"node-{uuid.uuid4().hex}"


def new_edge_id() -> str:
    return f"edge-{uuid.uuid4().hex}"


class GraphStore:
    """
    In-memory node/edge collections with integrity guarantees.

    Every mutation is all-or-nothing: an operation that raises leaves both
    collections exactly as they were. Listeners registered with add_listener
    are called once after each successful mutation.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._listeners: List[Callable[['GraphStore'], None]] = []

    # --- Read access ---

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def edges_of(self, node_id: str) -> List[Edge]:
        """Return every edge with node_id as either endpoint."""
        return [e for e in self._edges.values() if e.touches(node_id)]

    # --- Listeners ---

    def add_listener(self, callback: Callable[['GraphStore'], None]) -> None:
        self._listeners.append(callback)

    def _notify_change(self) -> None:
        for callback in self._listeners:
            callback(self)

    # --- Write operations ---

    def add_node(self, position: LatLng, label: Optional[str] = "") -> Node:
        """
        Add a node at position.

        Args:
            position: Map coordinate of the node
            label: Optional text; None and "" both mean "no label"

        Returns:
            The created Node
        """
        node = Node(id=new_node_id(), position=position, label=label or "")
        # ids must never repeat within a session
        while node.id in self._nodes:
            node = Node(id=new_node_id(), position=position, label=node.label)

        self._nodes[node.id] = node
        logger.info(f"Added node {node.id} at ({position.lat}, {position.lng}) label={node.label!r}")
        self._notify_change()
        return node

    def add_edge(self, node_id_a: str, node_id_b: str) -> Edge:
        """
        Connect two distinct existing nodes.

        Parallel edges between the same pair are permitted.

        Raises:
            SelfConnectionError: if both ids are the same
            UnknownNodeError: if either id is not a node in the graph
        """
        if node_id_a == node_id_b:
            raise SelfConnectionError(node_id_a)
        for node_id in (node_id_a, node_id_b):
            if node_id not in self._nodes:
                raise UnknownNodeError(node_id)

        edge = Edge(id=new_edge_id(), node1=node_id_a, node2=node_id_b)
        while edge.id in self._edges:
            edge = Edge(id=new_edge_id(), node1=node_id_a, node2=node_id_b)

        self._edges[edge.id] = edge
        logger.info(f"Added edge {edge.id} between {node_id_a} and {node_id_b}")
        self._notify_change()
        return edge

    def remove_node(self, node_id: str) -> None:
        """Delete a node and every edge referencing it. Unknown ids are ignored."""
        if node_id not in self._nodes:
            logger.debug(f"remove_node: {node_id} not present, nothing to do")
            return

        incident = self.edges_of(node_id)
        del self._nodes[node_id]
        for edge in incident:
            del self._edges[edge.id]

        logger.info(f"Removed node {node_id} and {len(incident)} incident edge(s)")
        self._notify_change()

    def remove_edge(self, edge_id: str) -> None:
        """Delete a single edge. Unknown ids are ignored."""
        if edge_id not in self._edges:
            logger.debug(f"remove_edge: {edge_id} not present, nothing to do")
            return

        del self._edges[edge_id]
        logger.info(f"Removed edge {edge_id}")
        self._notify_change()

    def replace_all(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """
        Atomically swap the whole graph.

        Validation runs before anything is touched. Edges whose endpoints do
        not resolve are accepted; they are simply not rendered.

        Raises:
            GraphIntegrityError: on duplicate node/edge ids or self-loop edges
        """
        new_nodes: Dict[str, Node] = {}
        for node in nodes:
            if node.id in new_nodes:
                raise GraphIntegrityError(f"Duplicate node id: {node.id}")
            new_nodes[node.id] = node

        new_edges: Dict[str, Edge] = {}
        for edge in edges:
            if edge.id in new_edges:
                raise GraphIntegrityError(f"Duplicate edge id: {edge.id}")
            if edge.node1 == edge.node2:
                raise GraphIntegrityError(f"Edge {edge.id} connects node {edge.node1} to itself")
            new_edges[edge.id] = edge

        self._nodes = new_nodes
        self._edges = new_edges
        logger.info(f"Replaced graph: {len(new_nodes)} node(s), {len(new_edges)} edge(s)")
        self._notify_change()

    def clear(self) -> None:
        self.replace_all([], [])
