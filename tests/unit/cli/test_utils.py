"""Unit tests for CLI utilities."""

import json

from sitegraph.cli.utils import json_envelope, load_graph, resolve_root
from sitegraph.core.errors import InvalidRootError
from sitegraph.core.types import NodeKind


class TestLoadGraph:
    def test_from_file(self, graph_file, site_graph):
        graph = load_graph(str(graph_file))
        assert graph is not None
        assert graph.node_count == site_graph.node_count

    def test_from_directory(self, graph_file, tmp_path):
        assert load_graph(str(tmp_path)) is not None

    def test_missing(self, tmp_path, capsys):
        assert load_graph(str(tmp_path / "missing.json")) is None
        assert "Graph file not found" in capsys.readouterr().err

    def test_empty_directory(self, tmp_path, capsys):
        empty = tmp_path / "empty"
        empty.mkdir()
        assert load_graph(str(empty)) is None
        assert "No graph found" in capsys.readouterr().err

    def test_corrupt(self, tmp_path, capsys):
        path = tmp_path / "graph.json"
        path.write_text("{not json")
        assert load_graph(str(path)) is None
        assert "Failed to load graph" in capsys.readouterr().err


class TestResolveRoot:
    def test_exact_id(self, site_graph):
        page = site_graph.get_nodes_by_kind(NodeKind.PAGE)[0]
        assert resolve_root(site_graph, page.id) == page.id

    def test_section_label(self, site_graph):
        blog = resolve_root(site_graph, "Blog")
        assert site_graph.get_node(blog).kind is NodeKind.SECTION

    def test_any_label(self, site_graph):
        node = site_graph.get_node(resolve_root(site_graph, "lineup"))
        assert node.label == "lineup"
        assert not node.placeholder

    def test_placeholder_labels_not_resolved(self, site_graph):
        assert resolve_root(site_graph, "date: 2024/01") is None

    def test_unknown(self, site_graph):
        assert resolve_root(site_graph, "nowhere") is None


class TestJsonEnvelope:
    def test_success(self):
        payload = json.loads(json_envelope("stats", {"a": 1}))
        assert payload == {"meta": {"command": "stats", "status": "success"}, "data": {"a": 1}}

    def test_error(self):
        payload = json.loads(json_envelope("explore", error=InvalidRootError("x")))
        assert payload["meta"]["status"] == "error"
        assert payload["error"]["type"] == "InvalidRootError"
        assert "x" in payload["error"]["message"]
        assert "data" not in payload
