"""
Unit tests for the 'explore' command.
"""

import json

from sitegraph.cli.main import main


class TestExploreCommand:
    def test_table_by_label(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-d", "1"])
        assert result.exit_code == 0, result.output
        assert "Neighborhood of blog" in result.output
        assert "2024" in result.output
        assert "category" in result.output

    def test_json_response(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-d", "1", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        data = payload["data"]
        assert data["max_depth"] == 1
        assert data["mode"] == "hide-outside"
        assert len(data["keep"]) == 3
        assert data["depth"][data["root_id"]] == 0

    def test_depth_clamped(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-d", "0"])
        assert result.exit_code == 0
        assert "Depth 0 clamped to 1" in result.output

        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-d", "50", "--json"])
        assert json.loads(result.stdout)["data"]["max_depth"] == 10

    def test_dim_mode(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-m", "dim-outside", "--json"])
        nodes = json.loads(result.stdout)["data"]["nodes"]
        assert {v["visibility"] for v in nodes.values()} == {"shown", "dimmed"}

    def test_defaults_from_config(self, runner, graph_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("explore:\n  default_depth: 3\n  default_mode: dim-outside\n")
        result = runner.invoke(main, ["explore", "blog", "-g", str(graph_file), "-c", str(config), "--json"])
        data = json.loads(result.stdout)["data"]
        assert data["max_depth"] == 3
        assert data["mode"] == "dim-outside"

    def test_unknown_root(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "nowhere", "-g", str(graph_file)])
        assert result.exit_code == 1
        assert "Invalid root 'nowhere'" in result.output
        assert "sitegraph roots" in result.output

    def test_unknown_root_json(self, runner, graph_file):
        result = runner.invoke(main, ["explore", "nowhere", "-g", str(graph_file), "--json"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["error"]["type"] == "InvalidRootError"

    def test_placeholder_root(self, runner, graph_file, site_graph):
        date = [n for n in site_graph.iter_nodes() if n.kind.value == "date"][0]
        result = runner.invoke(main, ["explore", date.id, "-g", str(graph_file)])
        assert result.exit_code == 1
        assert "not navigable" in result.output
