"""Unit tests for the display policy."""

import pytest

from sitegraph.analysis.extractor import extract
from sitegraph.analysis.policy import DisplayMode, Visibility, apply_policy
from sitegraph.config import StyleSettings
from sitegraph.core.types import NodeKind


@pytest.fixture
def section(scenario_graph):
    return scenario_graph.get_nodes_by_kind(NodeKind.SECTION)[0]


def _view(graph, root_id, depth, mode, style=None):
    result = extract(graph, root_id, depth)
    return result, apply_policy(graph, result.keep, result.depth, root_id, mode, style=style)


class TestHideOutside:
    def test_only_kept_elements_shown(self, scenario_graph, section):
        result, view = _view(scenario_graph, section.id, 2, DisplayMode.HIDE_OUTSIDE)

        for node_id, visual in view.nodes.items():
            if node_id in result.keep:
                assert visual.visibility is Visibility.SHOWN
                assert visual.opacity == 1.0
            else:
                assert visual.visibility is Visibility.HIDDEN

        for edge in scenario_graph.iter_edges():
            both = edge.source in result.keep and edge.target in result.keep
            expected = Visibility.SHOWN if both else Visibility.HIDDEN
            assert view.edges[edge.id].visibility is expected

    def test_every_element_has_a_state(self, scenario_graph, section):
        _, view = _view(scenario_graph, section.id, 1, "hide-outside")
        assert len(view.nodes) == scenario_graph.node_count
        assert len(view.edges) == scenario_graph.edge_count

    def test_visible_ids(self, scenario_graph, section):
        result, view = _view(scenario_graph, section.id, 1, DisplayMode.HIDE_OUTSIDE)
        assert set(view.visible_node_ids()) == set(result.keep)
        assert len(view.visible_edge_ids()) == 1


class TestDimOutside:
    def test_outside_is_dimmed_not_hidden(self, scenario_graph, section):
        style = StyleSettings(dim_opacity=0.2)
        result, view = _view(scenario_graph, section.id, 1, DisplayMode.DIM_OUTSIDE, style)

        for node_id, visual in view.nodes.items():
            if node_id in result.keep:
                assert visual.visibility is Visibility.SHOWN
            else:
                assert visual.visibility is Visibility.DIMMED
                assert visual.opacity == 0.2
        assert all(v.visibility is not Visibility.HIDDEN for v in view.edges.values())

    def test_placeholders_always_dimmed(self, scenario_graph, section):
        _, view = _view(scenario_graph, section.id, 10, DisplayMode.DIM_OUTSIDE)
        for node in scenario_graph.iter_nodes():
            if node.placeholder:
                assert view.nodes[node.id].visibility is Visibility.DIMMED


class TestScale:
    def test_size_decays_with_depth(self, scenario_graph, section):
        style = StyleSettings(base_node_size=40, ratio=0.5, min_node_size=6, base_font_size=16, min_font_size=4)
        result, view = _view(scenario_graph, section.id, 10, DisplayMode.HIDE_OUTSIDE, style)

        sizes = {result.depth[nid]: view.nodes[nid].size for nid in result.keep}
        assert sizes[0] == 40
        assert sizes[1] == 20
        assert sizes[2] == 10
        # Floored from depth 3 on (40 * 0.5**3 == 5 < 6)
        assert sizes[3] == 6
        assert sizes[5] == 6
        fonts = {result.depth[nid]: view.nodes[nid].font_size for nid in result.keep}
        assert fonts[1] == 8
        assert fonts[4] == 4

    def test_root_always_base_size(self, scenario_graph, section):
        style = StyleSettings(base_node_size=10, min_node_size=30)
        _, view = _view(scenario_graph, section.id, 3, DisplayMode.HIDE_OUTSIDE, style)
        assert view.nodes[section.id].size == 10
        assert view.nodes[section.id].depth == 0

    def test_outside_nodes_get_background_size(self, scenario_graph, section):
        style = StyleSettings(background_node_size=3, background_font_size=2)
        result, view = _view(scenario_graph, section.id, 1, DisplayMode.DIM_OUTSIDE, style)
        outside = [nid for nid in view.nodes if nid not in result.keep]
        assert outside
        for nid in outside:
            assert view.nodes[nid].size == 3
            assert view.nodes[nid].font_size == 2
            assert view.nodes[nid].depth is None

    def test_unknown_mode_rejected(self, scenario_graph, section):
        with pytest.raises(ValueError):
            _view(scenario_graph, section.id, 1, "fade-outside")
