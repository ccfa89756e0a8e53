"""
Main NiceGUI application for GraphMap.
Builds an EditorSession per page, renders the graph on ui.leaflet,
and provides the mode / label / save / load controls in a ui.row.
"""

from nicegui import ui
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from graphmap.config import get_map_settings
from graphmap.edit import EditMode
from graphmap.edit.handlers import setup_edit_handlers, bind_mode_buttons
from graphmap.map_view import MapView
from graphmap.session import EditorSession

settings = get_map_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('graphmap.app')

MODE_BUTTONS = [
    (EditMode.ADD_NODE, 'Add Node', 'add_location'),
    (EditMode.CONNECT_NODES, 'Connect Nodes', 'timeline'),
    (EditMode.DELETE, 'Delete', 'delete'),
]


# UI Construction - encapsulated in page function so every tab gets its own graph
@ui.page('/')
def main_page():
    session = EditorSession()

    ui.label('Interactive Graph Map').classes('text-2xl font-bold')

    # 1. Controls
    with ui.row().classes('items-center gap-2 mb-2'):
        buttons = {}
        for mode, text, icon in MODE_BUTTONS:
            buttons[mode] = ui.button(text, icon=icon)
        idle_btn = ui.button(icon='pan_tool').props('flat').tooltip('Stop editing')

        ui.separator().props('vertical')
        save_btn = ui.button('Save', icon='download')
        handlers = {}
        ui.upload(label='Load graph', auto_upload=True,
                  on_upload=lambda e: handlers['handle_upload'](e)).props('accept=.json flat dense')

        ui.input(placeholder='Enter node label').bind_value(session.label_input, 'value').props('dense outlined')

    # 2. Map
    map_view = MapView(settings)
    handlers.update(setup_edit_handlers(session, map_view))

    for mode, btn in buttons.items():
        btn.on_click(lambda _, m=mode: handlers['set_mode'](m))
    idle_btn.on_click(lambda _: handlers['set_mode'](EditMode.IDLE))
    save_btn.on_click(lambda _: handlers['save_graph']())

    bind_mode_buttons(session, buttons)
    handlers['refresh_map']()


if __name__ in {"__main__", "__mp_main__"}:
    logger.info(f"Starting GraphMap on port {settings.port}")
    ui.run(
        title='GraphMap',
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )
