import pytest

from graphmap.graph_store import Edge, LatLng, Node
from graphmap.graph_viz import GraphVisualizer, label_color, node_color


def test_node_color_is_pure_function_of_label_and_selection():
    labeled = Node("n1", LatLng(0, 0), "A")
    unlabeled = Node("n2", LatLng(0, 0), "")

    assert node_color(labeled) == "red"
    assert node_color(unlabeled) == "blue"
    assert node_color(labeled, pending_id="n1") == "yellow"
    assert node_color(unlabeled, pending_id="n2") == "yellow"
    # pending elsewhere does not affect this node
    assert node_color(labeled, pending_id="n2") == "red"


@pytest.mark.parametrize("label, expected", [("x", "red"), ("", "blue"), (None, "blue")])
def test_label_color(label, expected):
    assert label_color(label) == expected


def test_build_render_state():
    nodes = [
        Node("a", LatLng(1, 2), "A"),
        Node("b", LatLng(3, 4), ""),
    ]
    edges = [
        Edge("e1", "a", "b"),
        Edge("e2", "b", "a"),          # parallel edge, still drawn
        Edge("e3", "a", "missing"),    # dangling, not drawn
    ]

    state = GraphVisualizer().build(nodes, edges, pending_id="b")

    assert state["nodes"] == [
        {"id": "a", "latlng": [1, 2], "label": "A", "color": "red", "radius": 8},
        {"id": "b", "latlng": [3, 4], "label": "", "color": "yellow", "radius": 8},
    ]
    assert [e["id"] for e in state["edges"]] == ["e1", "e2"]
    e2 = state["edges"][1]
    assert e2["positions"] == [[3, 4], [1, 2]]
    assert e2["color"] == "black"
    assert e2["dashArray"] == "5,5"


def test_build_empty_graph():
    assert GraphVisualizer().build([], []) == {"nodes": [], "edges": []}
