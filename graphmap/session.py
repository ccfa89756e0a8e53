"""
Editor session - one user's graph, selection, mode and label input.

This is the object the UI talks to. It owns no NiceGUI state, so the whole
click-to-mutation pipeline can be driven from tests:

    session = EditorSession()
    session.set_mode(EditMode.ADD_NODE)
    session.dispatch(MapClick(LatLng(10, 20)))
"""

import logging
from typing import Any, Dict, List

from graphmap.edit.actions import EditActions, LabelInput
from graphmap.edit.controller import ClickEvent, EditMode, MapClick, ModeController
from graphmap.edit.hit_test import locate_click
from graphmap.errors import FormatError, GraphIntegrityError
from graphmap.graph_store import GraphStore, LatLng
from graphmap.graph_viz import GraphVisualizer
from graphmap.selection import SelectionState
from graphmap.serializer import GraphSerializer

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(self):
        self.store = GraphStore()
        self.selection = SelectionState()
        self.label_input = LabelInput()
        self.serializer = GraphSerializer()
        self.visualizer = GraphVisualizer()
        self.actions = EditActions(self.store, self.selection, self.label_input)
        self.controller = ModeController(self.actions.handler_table())

        # A half-finished edge never survives leaving connect mode
        self.controller.on_leave(EditMode.CONNECT_NODES, self.selection.cancel)
        self.store.add_listener(self._drop_stale_selection)

    @property
    def mode(self) -> EditMode:
        return self.controller.mode

    @property
    def label(self) -> str:
        return self.label_input.value

    @label.setter
    def label(self, value: str) -> None:
        self.label_input.value = value or ""

    def set_mode(self, mode: EditMode) -> None:
        self.controller.set_mode(mode)

    def dispatch(self, event: ClickEvent) -> bool:
        return self.controller.dispatch(event)

    def handle_map_click(self, position: LatLng, zoom: float) -> ClickEvent:
        """
        Resolve a raw map click to a node/edge/background event and dispatch it.

        A shape click the current mode has no handler for falls through to the
        map underneath, so ADD_NODE can place a node on top of a marker or line.
        """
        event = locate_click(position, zoom, self.render_state())
        if not self.dispatch(event) and not isinstance(event, MapClick):
            logger.debug(f"{type(event).__name__} unhandled in {self.mode.value}, passing to map")
            self.dispatch(MapClick(position))
        return event

    def render_state(self) -> Dict[str, List[Dict[str, Any]]]:
        return self.visualizer.build(self.store.nodes, self.store.edges, self.selection.current())

    # --- Save / Load ---

    def save_text(self) -> str:
        text = self.serializer.serialize(self.store.nodes, self.store.edges)
        logger.info(f"Serialized graph: {len(self.store.nodes)} node(s), {len(self.store.edges)} edge(s)")
        return text

    def load_text(self, text: str) -> None:
        """
        Replace the whole graph with the contents of a saved file.

        Parsing completes before the store is touched, so a FormatError
        leaves the current graph exactly as it was.
        """
        try:
            nodes, edges = self.serializer.deserialize(text)
            self.store.replace_all(nodes, edges)
        except GraphIntegrityError as e:
            logger.warning(f"Rejected graph file: {e}")
            raise FormatError(str(e)) from e
        except FormatError as e:
            logger.warning(f"Rejected graph file: {e}")
            raise

    def _drop_stale_selection(self, store: GraphStore) -> None:
        pending = self.selection.current()
        if pending is not None and pending not in store:
            self.selection.cancel()
