"""
Edit Handlers - Event handlers for map editing in app.py

This module extracts all the edit event handling from app.py
to keep the main application file focused on layout.
"""

import logging
from typing import Any, Callable, Dict

from nicegui import events, run, ui

from graphmap.edit.controller import EditMode
from graphmap.errors import FormatError, GraphMapError
from graphmap.graph_store import LatLng
from graphmap.map_view import MapView
from graphmap.serializer import GRAPH_FILENAME, GRAPH_MEDIA_TYPE
from graphmap.session import EditorSession

logger = logging.getLogger(__name__)


def setup_edit_handlers(session: EditorSession, map_view: MapView) -> Dict[str, Callable]:
    """
    Set up all editing event handlers.

    Args:
        session: EditorSession owning graph, selection and mode
        map_view: MapView to redraw after every change

    Returns:
        Dict with handler functions for binding to UI events
    """

    def refresh_map():
        map_view.render(session.render_state())

    def handle_map_click(position: LatLng, zoom: float):
        """Route a map click through hit detection into the current mode."""
        try:
            session.handle_map_click(position, zoom)
        except GraphMapError as e:
            logger.warning(f"Edit rejected: {e}")
            ui.notify(str(e), type='negative', position='bottom')
        finally:
            refresh_map()

    def set_mode(mode: EditMode):
        session.set_mode(mode)
        refresh_map()

    def save_graph():
        text = session.save_text()
        ui.download(text.encode('utf-8'), GRAPH_FILENAME, GRAPH_MEDIA_TYPE)

    async def handle_upload(e: events.UploadEventArguments):
        """Read the uploaded file completely, then swap the graph in one step."""
        try:
            raw = await run.io_bound(e.content.read)
            text = raw.decode('utf-8') if isinstance(raw, bytes) else raw
            session.load_text(text)
        except (FormatError, UnicodeDecodeError) as err:
            logger.warning(f"Failed to load {e.name}: {err}")
            ui.notify('Invalid file format.', type='negative')
            return
        finally:
            e.sender.reset()
        logger.info(f"Loaded graph from {e.name}")
        ui.notify('Graph loaded from file.', type='positive')
        refresh_map()

    map_view.set_on_click(handle_map_click)

    return {
        'refresh_map': refresh_map,
        'handle_map_click': handle_map_click,
        'set_mode': set_mode,
        'save_graph': save_graph,
        'handle_upload': handle_upload,
    }


def bind_mode_buttons(session: EditorSession, buttons: Dict[EditMode, Any]) -> None:
    """Keep the active mode's button highlighted."""

    def update_visuals(mode: EditMode):
        for btn_mode, btn in buttons.items():
            btn.props(remove='color')
            btn.props(f'color={"primary" if btn_mode == mode else "grey"}')

    session.controller.add_mode_listener(update_visuals)
    update_visuals(session.mode)
