"""Unit tests for the HTML hand-off."""

import json
from unittest.mock import patch

import pytest

from sitegraph.analysis.explore import ExplorationRequest, explore
from sitegraph.core.types import NodeKind
from sitegraph.graph.visualize import build_elements, generate_html, write_visualization


@pytest.fixture
def response(scenario_graph):
    section = scenario_graph.get_nodes_by_kind(NodeKind.SECTION)[0]
    return explore(scenario_graph, ExplorationRequest(root_id=section.id, max_depth=1))


class TestBuildElements:
    def test_every_element_present(self, scenario_graph, response):
        elements = build_elements(scenario_graph, response)
        nodes = [e for e in elements if e["group"] == "nodes"]
        edges = [e for e in elements if e["group"] == "edges"]
        assert len(nodes) == scenario_graph.node_count
        assert len(edges) == scenario_graph.edge_count

    def test_hidden_and_root_classes(self, scenario_graph, response):
        elements = {e["data"]["id"]: e for e in build_elements(scenario_graph, response)}
        assert "root" in elements[response.root_id]["classes"]
        assert "hidden" in elements[scenario_graph.site.id]["classes"]
        assert elements[response.root_id]["data"]["size"] == 48.0

    def test_page_carries_url(self, scenario_graph, response):
        elements = {e["data"]["id"]: e for e in build_elements(scenario_graph, response)}
        page = scenario_graph.get_nodes_by_kind(NodeKind.PAGE)[0]
        assert elements[page.id]["data"]["url"] == page.url


class TestGenerateHtml:
    def test_placeholders_filled(self, scenario_graph, response):
        html = generate_html(scenario_graph, response)
        assert "__GRAPH_DATA__" not in html
        assert "__TITLE__" not in html
        assert "ex.com sitemap" in html
        assert "depth 1" in html
        assert "hide-outside" in html

    def test_embedded_data_is_json(self, scenario_graph, response):
        html = generate_html(scenario_graph, response)
        start = html.index("const ELEMENTS = ") + len("const ELEMENTS = ")
        end = html.index(";\n", start)
        data = json.loads(html[start:end].replace("<\\/", "</"))
        assert len(data) == scenario_graph.node_count + scenario_graph.edge_count


class TestWriteVisualization:
    def test_writes_file(self, scenario_graph, response, tmp_path):
        out = tmp_path / "out" / "view.html"
        path = write_visualization(scenario_graph, response, str(out))
        assert path == str(out)
        assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_opens_browser(self, scenario_graph, response, tmp_path):
        out = tmp_path / "view.html"
        with patch("sitegraph.graph.visualize.webbrowser.open") as mock_open:
            write_visualization(scenario_graph, response, str(out), open_browser=True)
        mock_open.assert_called_once_with(out.resolve().as_uri())
