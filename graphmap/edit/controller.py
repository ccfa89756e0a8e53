"""
Mode Controller - Single source of truth for the current editing mode.

Every incoming event (background click, node click, edge click) is routed
through one handler table per mode. A mode with no entry for an event type
ignores that event. The only transition not driven by an explicit
set_mode() call is the one-shot delete: DELETE falls back to IDLE once a
delete handler has run.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Type, Union

from graphmap.graph_store import LatLng

logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    IDLE = "idle"
    ADD_NODE = "add_node"
    CONNECT_NODES = "connect_nodes"
    DELETE = "delete"


@dataclass(frozen=True)
class MapClick:
    """Click on the map background."""
    position: LatLng


@dataclass(frozen=True)
class NodeClick:
    node_id: str


@dataclass(frozen=True)
class EdgeClick:
    edge_id: str


ClickEvent = Union[MapClick, NodeClick, EdgeClick]
Handler = Callable[[ClickEvent], None]
HandlerTable = Dict[Type, Handler]


class ModeController:
    """Holds the current EditMode and dispatches events to its handler table."""

    def __init__(self, handlers: Optional[Dict[EditMode, HandlerTable]] = None):
        self._mode = EditMode.IDLE
        self._handlers: Dict[EditMode, HandlerTable] = {mode: {} for mode in EditMode}
        self._on_mode_change: List[Callable[[EditMode], None]] = []
        self._on_leave: Dict[EditMode, Callable[[], None]] = {}
        for mode, table in (handlers or {}).items():
            for event_type, handler in table.items():
                self.register(mode, event_type, handler)

    @property
    def mode(self) -> EditMode:
        return self._mode

    def register(self, mode: EditMode, event_type: Type, handler: Handler) -> None:
        self._handlers[mode][event_type] = handler

    def on_leave(self, mode: EditMode, callback: Callable[[], None]) -> None:
        """Run callback whenever the controller transitions out of mode."""
        self._on_leave[mode] = callback

    def add_mode_listener(self, callback: Callable[[EditMode], None]) -> None:
        self._on_mode_change.append(callback)

    def handler_for(self, event: ClickEvent) -> Optional[Handler]:
        return self._handlers[self._mode].get(type(event))

    def set_mode(self, mode: EditMode) -> None:
        mode = EditMode(mode)
        if mode == self._mode:
            return

        previous = self._mode
        leave = self._on_leave.get(previous)
        if leave:
            leave()

        self._mode = mode
        logger.info(f"Mode changed: {previous.value} -> {mode.value}")
        for callback in self._on_mode_change:
            callback(mode)

    def dispatch(self, event: ClickEvent) -> bool:
        """
        Route event to the handler for the current mode.

        Returns:
            True if a handler ran, False if the event was ignored.

        Exceptions raised by the handler propagate to the caller. A DELETE
        handler returns the controller to IDLE even when it raises.
        """
        handler = self.handler_for(event)
        if handler is None:
            logger.debug(f"Ignoring {type(event).__name__} in mode {self._mode.value}")
            return False

        mode = self._mode
        try:
            handler(event)
        finally:
            if mode == EditMode.DELETE:
                self.set_mode(EditMode.IDLE)
        return True
