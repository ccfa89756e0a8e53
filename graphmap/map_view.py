"""
Leaflet map view.

Thin adapter between the render state produced by GraphVisualizer and a
NiceGUI ui.leaflet element. Every redraw removes the previous node/edge
layers and adds fresh ones; the tile layer is left alone.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from nicegui import events, ui

from graphmap.config import MapSettings
from graphmap.graph_store import LatLng

logger = logging.getLogger(__name__)


class MapView:
    def __init__(self, settings: MapSettings):
        self.settings = settings
        self.zoom: float = settings.zoom
        self._layers: List[Any] = []
        self._on_click: Optional[Callable[[LatLng, float], None]] = None

        self.map = ui.leaflet(center=settings.center, zoom=settings.zoom).classes('w-full h-[500px]')
        self.map.clear_layers()
        self.map.tile_layer(
            url_template=settings.tile_url,
            options={'maxZoom': 19, 'attribution': '&copy; OpenStreetMap contributors'},
        )
        self.map.on('map-click', self._handle_click)
        self.map.on('map-zoomend', self._handle_zoom)

    def set_on_click(self, callback: Callable[[LatLng, float], None]) -> None:
        self._on_click = callback

    def _handle_zoom(self, e: events.GenericEventArguments) -> None:
        zoom = e.args.get('zoom') if isinstance(e.args, dict) else None
        if zoom is not None:
            self.zoom = zoom

    def _handle_click(self, e: events.GenericEventArguments) -> None:
        latlng = e.args.get('latlng') if isinstance(e.args, dict) else None
        if not latlng or self._on_click is None:
            return
        self._on_click(LatLng(latlng['lat'], latlng['lng']), self.zoom)

    def render(self, render_state: Dict[str, List[Dict[str, Any]]]) -> None:
        for layer in self._layers:
            self.map.remove_layer(layer)
        self._layers = []

        # Edges first so node markers stay on top
        for edge in render_state.get('edges', []):
            layer = self.map.generic_layer(name='polyline', args=[
                edge['positions'],
                {'color': edge['color'], 'dashArray': edge['dashArray'], 'bubblingMouseEvents': True},
            ])
            self._layers.append(layer)

        for node in render_state.get('nodes', []):
            layer = self.map.generic_layer(name='circleMarker', args=[
                node['latlng'],
                {
                    'radius': node['radius'],
                    'color': node['color'],
                    'fillColor': node['color'],
                    'fillOpacity': 1,
                    'bubblingMouseEvents': True,
                },
            ])
            if node['label']:
                layer.run_method('bindTooltip', node['label'], {'permanent': True})
            self._layers.append(layer)

        logger.debug(f"Rendered {len(render_state.get('nodes', []))} node(s), "
                     f"{len(render_state.get('edges', []))} edge(s)")
