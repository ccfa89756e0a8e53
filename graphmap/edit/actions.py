"""
Edit Actions Module

Per-mode behaviours behind the ModeController handler table.
Translates click events into concrete GraphStore / SelectionState operations.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from graphmap.edit.controller import EdgeClick, EditMode, HandlerTable, MapClick, NodeClick
from graphmap.errors import SelfConnectionError
from graphmap.graph_store import Edge, GraphStore, Node
from graphmap.selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass
class LabelInput:
    """Free-text label typed by the user, consumed by the next added node."""
    value: str = ""

    def take(self) -> str:
        text, self.value = self.value or "", ""
        return text


class EditActions:
    """
    Handles execution of editing actions.

    Each handler takes the click event that triggered it and commits the
    change to the GraphStore.
    """

    def __init__(self, store: GraphStore, selection: SelectionState, label_input: LabelInput):
        self.store = store
        self.selection = selection
        self.label_input = label_input

    def handler_table(self) -> Dict[EditMode, HandlerTable]:
        return {
            EditMode.ADD_NODE: {MapClick: self.add_node},
            EditMode.CONNECT_NODES: {NodeClick: self.connect_node},
            EditMode.DELETE: {
                NodeClick: self.delete_node,
                EdgeClick: self.delete_edge,
            },
        }

    def add_node(self, event: MapClick) -> Node:
        """Place a node at the clicked position, using and clearing the label input."""
        return self.store.add_node(event.position, self.label_input.take())

    def connect_node(self, event: NodeClick) -> Optional[Edge]:
        """
        One click of the two-click connect gesture.

        First click marks the node pending. Second click resolves the selection
        and creates an edge; clicking the pending node again cancels and raises
        SelfConnectionError.

        Returns:
            The new Edge on the second click, None on the first
        """
        node_id = event.node_id
        if not self.selection:
            self.selection.begin(node_id)
            return None

        first = self.selection.resolve(node_id)
        if first == node_id:
            self.selection.cancel()
            logger.warning(f"Rejected self-connection on {node_id}")
            raise SelfConnectionError(node_id)

        return self.store.add_edge(first, node_id)

    def delete_node(self, event: NodeClick) -> None:
        self.store.remove_node(event.node_id)

    def delete_edge(self, event: EdgeClick) -> None:
        self.store.remove_edge(event.edge_id)
