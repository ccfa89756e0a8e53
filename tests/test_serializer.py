import json

import pytest

from graphmap.errors import FormatError
from graphmap.graph_store import Edge, GraphStore, LatLng, Node
from graphmap.graph_viz import label_color
from graphmap.serializer import GRAPH_FILENAME, GRAPH_MEDIA_TYPE, GraphSerializer
from graphmap.session import EditorSession


@pytest.fixture
def serializer():
    return GraphSerializer()


@pytest.fixture
def store():
    store = GraphStore()
    a = store.add_node(LatLng(10, 20), "A")
    b = store.add_node(LatLng(30.5, -40.25), "")
    c = store.add_node(LatLng(-1, 0), "Café")
    store.add_edge(a.id, b.id)
    store.add_edge(c.id, a.id)
    store.add_edge(a.id, b.id)
    return store


def test_file_constants():
    assert GRAPH_FILENAME == "graph_data.json"
    assert GRAPH_MEDIA_TYPE == "application/json"


def test_serialize_layout_is_readable_and_has_no_color(serializer, store):
    text = serializer.serialize(store.nodes, store.edges)
    data = json.loads(text)

    assert "\n  " in text  # indented
    assert [n["id"] for n in data["nodes"]] == [n.id for n in store.nodes]
    assert data["nodes"][0] == {"id": store.nodes[0].id, "latlng": {"lat": 10, "lng": 20}, "label": "A"}
    assert data["edges"][0] == {
        "id": store.edges[0].id,
        "node1": store.nodes[0].id,
        "node2": store.nodes[1].id,
    }
    assert "color" not in text


def test_serialize_is_stable(serializer, store):
    assert serializer.serialize(store.nodes, store.edges) == serializer.serialize(store.nodes, store.edges)


def test_round_trip(serializer, store):
    nodes, edges = serializer.deserialize(serializer.serialize(store.nodes, store.edges))
    assert tuple(nodes) == store.nodes
    assert tuple(edges) == store.edges
    assert [label_color(n.label) for n in nodes] == ["red", "blue", "red"]


def test_legacy_color_field_is_ignored(serializer):
    text = json.dumps({
        "nodes": [
            {"id": "node-1", "latlng": {"lat": 1, "lng": 2}, "label": "", "color": "yellow"},
            {"id": "node-2", "latlng": {"lat": 3, "lng": 4}, "label": "x", "color": "blue"},
        ],
        "edges": [],
    })
    nodes, _ = serializer.deserialize(text)
    assert [label_color(n.label) for n in nodes] == ["blue", "red"]
    assert not hasattr(nodes[0], "color")


def test_missing_or_null_label_is_unlabeled(serializer):
    text = json.dumps({
        "nodes": [
            {"id": "node-1", "latlng": {"lat": 1, "lng": 2}},
            {"id": "node-2", "latlng": {"lat": 1, "lng": 2}, "label": None},
        ],
        "edges": [],
    })
    nodes, _ = serializer.deserialize(text)
    assert [n.label for n in nodes] == ["", ""]


def test_dangling_edges_are_accepted(serializer):
    text = json.dumps({
        "nodes": [{"id": "node-1", "latlng": {"lat": 1, "lng": 2}, "label": ""}],
        "edges": [{"id": "edge-1", "node1": "node-1", "node2": "node-gone"}],
    })
    nodes, edges = serializer.deserialize(text)
    assert edges == [Edge("edge-1", "node-1", "node-gone")]


@pytest.mark.parametrize("text", [
    "",
    "not json at all",
    "[1, 2, 3]",
    '{"nodes": []}',
    '{"edges": []}',
    '{"nodes": {}, "edges": []}',
    '{"nodes": [42], "edges": []}',
    '{"nodes": [{"latlng": {"lat": 1, "lng": 2}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": 1}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": "north", "lng": 2}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": true, "lng": 2}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": [1, 2]}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": 1, "lng": 2}, "label": 5}], "edges": []}',
    '{"nodes": [], "edges": [{"id": "e", "node1": "a"}]}',
    '{"nodes": [{"id": "n", "latlng": {"lat": NaN, "lng": 2}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": 1, "lng": Infinity}}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": 1, "lng": 2}, "label": 0}], "edges": []}',
    '{"nodes": [{"id": "n", "latlng": {"lat": 1, "lng": 2}, "label": false}], "edges": []}',
])
def test_invalid_documents_raise_format_error(serializer, text):
    with pytest.raises(FormatError):
        serializer.deserialize(text)


class TestSessionSaveLoad:
    def test_save_then_load_restores_graph(self, store):
        session = EditorSession()
        session.store.replace_all(store.nodes, store.edges)
        saved = session.save_text()

        other = EditorSession()
        other.load_text(saved)
        assert other.store.nodes == store.nodes
        assert other.store.edges == store.edges

    @pytest.mark.parametrize("text", [
        "{broken",
        '{"nodes": [{"id": "n", "latlng": {"lat": 1, "lng": 2}}, '
        '{"id": "n", "latlng": {"lat": 3, "lng": 4}}], "edges": []}',
        '{"nodes": [], "edges": [{"id": "e", "node1": "a", "node2": "a"}]}',
    ])
    def test_failed_load_leaves_graph_untouched(self, store, text):
        session = EditorSession()
        session.store.replace_all(store.nodes, store.edges)

        with pytest.raises(FormatError):
            session.load_text(text)

        assert session.store.nodes == store.nodes
        assert session.store.edges == store.edges

    def test_deeply_nested_document_is_format_error(self, store):
        session = EditorSession()
        session.store.replace_all(store.nodes, store.edges)
        text = '{"nodes": ' + '[' * 100000 + ']' * 100000 + ', "edges": []}'

        with pytest.raises(FormatError):
            session.load_text(text)

        assert session.store.nodes == store.nodes
