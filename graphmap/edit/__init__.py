"""
Click-driven editing for the GraphMap graph.

This package provides mode-based editing:
- ModeController: current mode and per-mode event dispatch
- EditActions: graph mutations behind each mode
- hit_test: classify a map click as node / edge / background
- handlers: NiceGUI event wiring (imported separately, needs a UI context)

Usage:
    from graphmap.edit import EditMode, ModeController, EditActions
    from graphmap.edit.handlers import setup_edit_handlers
"""

from graphmap.edit.constants import (
    NODE_RADIUS,
    NODE_CLICK_RADIUS,
    EDGE_CLICK_TOLERANCE,
)
from graphmap.edit.controller import (
    EditMode,
    ModeController,
    MapClick,
    NodeClick,
    EdgeClick,
)
from graphmap.edit.actions import EditActions, LabelInput

__all__ = [
    'EditMode',
    'ModeController',
    'MapClick',
    'NodeClick',
    'EdgeClick',
    'EditActions',
    'LabelInput',
    'NODE_RADIUS',
    'NODE_CLICK_RADIUS',
    'EDGE_CLICK_TOLERANCE',
]
