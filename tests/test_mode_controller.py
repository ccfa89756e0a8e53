"""Tests for the mode state machine and its per-mode dispatch tables."""

import pytest

from graphmap.edit.controller import EdgeClick, EditMode, MapClick, ModeController, NodeClick
from graphmap.graph_store import LatLng


@pytest.fixture
def calls():
    return []


@pytest.fixture
def controller(calls):
    return ModeController({
        EditMode.ADD_NODE: {MapClick: lambda e: calls.append(("add", e))},
        EditMode.CONNECT_NODES: {NodeClick: lambda e: calls.append(("connect", e))},
        EditMode.DELETE: {
            NodeClick: lambda e: calls.append(("delete_node", e)),
            EdgeClick: lambda e: calls.append(("delete_edge", e)),
        },
    })


def test_initial_mode_is_idle(controller):
    assert controller.mode == EditMode.IDLE


@pytest.mark.parametrize("event", [MapClick(LatLng(0, 0)), NodeClick("n"), EdgeClick("e")])
def test_idle_ignores_every_event(controller, calls, event):
    assert controller.dispatch(event) is False
    assert calls == []


def test_dispatch_routes_to_current_mode(controller, calls):
    controller.set_mode(EditMode.ADD_NODE)
    click = MapClick(LatLng(1, 2))
    assert controller.dispatch(click) is True
    # node clicks have no handler in add-node mode
    assert controller.dispatch(NodeClick("n")) is False
    assert calls == [("add", click)]


def test_modes_persist_across_events_except_delete(controller, calls):
    controller.set_mode(EditMode.CONNECT_NODES)
    controller.dispatch(NodeClick("a"))
    controller.dispatch(NodeClick("b"))
    assert controller.mode == EditMode.CONNECT_NODES
    assert len(calls) == 2


@pytest.mark.parametrize("event", [NodeClick("n"), EdgeClick("e")])
def test_delete_is_one_shot(controller, calls, event):
    controller.set_mode(EditMode.DELETE)
    controller.dispatch(event)
    assert controller.mode == EditMode.IDLE

    # A second click is now ignored
    controller.dispatch(event)
    assert len(calls) == 1


def test_background_click_in_delete_mode_keeps_mode(controller, calls):
    controller.set_mode(EditMode.DELETE)
    assert controller.dispatch(MapClick(LatLng(0, 0))) is False
    assert controller.mode == EditMode.DELETE


def test_delete_returns_to_idle_even_if_handler_fails():
    def boom(event):
        raise RuntimeError("boom")

    controller = ModeController({EditMode.DELETE: {NodeClick: boom}})
    controller.set_mode(EditMode.DELETE)
    with pytest.raises(RuntimeError):
        controller.dispatch(NodeClick("n"))
    assert controller.mode == EditMode.IDLE


def test_mode_listeners_and_leave_callbacks(controller):
    seen = []
    left = []
    controller.add_mode_listener(seen.append)
    controller.on_leave(EditMode.CONNECT_NODES, lambda: left.append(True))

    controller.set_mode(EditMode.CONNECT_NODES)
    controller.set_mode(EditMode.CONNECT_NODES)  # no-op, same mode
    controller.set_mode("add_node")

    assert seen == [EditMode.CONNECT_NODES, EditMode.ADD_NODE]
    assert left == [True]


def test_set_mode_rejects_unknown_mode(controller):
    with pytest.raises(ValueError):
        controller.set_mode("teleport")
