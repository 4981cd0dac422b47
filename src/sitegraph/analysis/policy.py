"""
Display Policy.

Marks every node and edge as shown, dimmed or hidden for a given
extraction, and assigns node sizes that shrink geometrically with hop
distance from the root.

Two modes:
- hide-outside: anything not in view is hidden.
- dim-outside: everything starts dimmed, the focused neighborhood is
  restored to full opacity so global context stays visible.
"""

from enum import StrEnum
from typing import Dict, FrozenSet, Mapping

from pydantic import BaseModel, ConfigDict

from ..config import StyleSettings
from ..core.graph import SiteGraph


class DisplayMode(StrEnum):
    HIDE_OUTSIDE = "hide-outside"
    DIM_OUTSIDE = "dim-outside"


class Visibility(StrEnum):
    SHOWN = "shown"
    DIMMED = "dimmed"
    HIDDEN = "hidden"


class NodeVisual(BaseModel):
    visibility: Visibility
    opacity: float
    size: float
    font_size: float
    depth: int | None = None

    model_config = ConfigDict(frozen=True)


class EdgeVisual(BaseModel):
    visibility: Visibility
    opacity: float

    model_config = ConfigDict(frozen=True)


class ViewState(BaseModel):
    """Per-element visual state, keyed by element id."""
    nodes: Dict[str, NodeVisual]
    edges: Dict[str, EdgeVisual]

    model_config = ConfigDict(frozen=True)

    def visible_node_ids(self) -> list:
        return [nid for nid, v in self.nodes.items() if v.visibility is not Visibility.HIDDEN]

    def visible_edge_ids(self) -> list:
        return [eid for eid, v in self.edges.items() if v.visibility is not Visibility.HIDDEN]


def _outside_state(mode: DisplayMode, style: StyleSettings) -> tuple:
    if mode is DisplayMode.HIDE_OUTSIDE:
        return Visibility.HIDDEN, 0.0
    return Visibility.DIMMED, style.dim_opacity


def apply_policy(
    graph: SiteGraph,
    keep: FrozenSet[str],
    depth: Mapping[str, int],
    root_id: str,
    mode: DisplayMode | str,
    style: StyleSettings | None = None,
) -> ViewState:
    """
    Compute the visual state of every element of the graph.

    Nodes in `keep` are shown at full opacity and sized by their BFS depth
    (the root always at base size); edges are shown only when both
    endpoints are kept. Everything else is hidden or dimmed by `mode` and
    drawn at the background size.
    """
    mode = DisplayMode(mode)
    style = style or StyleSettings()
    outside_visibility, outside_opacity = _outside_state(mode, style)

    nodes: Dict[str, NodeVisual] = {}
    for node in graph.iter_nodes():
        if node.id == root_id:
            nodes[node.id] = NodeVisual(
                visibility=Visibility.SHOWN,
                opacity=1.0,
                size=style.base_node_size,
                font_size=style.base_font_size,
                depth=0,
            )
        elif node.id in keep:
            hops = depth.get(node.id, 0)
            nodes[node.id] = NodeVisual(
                visibility=Visibility.SHOWN,
                opacity=1.0,
                size=style.node_size(hops),
                font_size=style.font_size(hops),
                depth=hops,
            )
        else:
            nodes[node.id] = NodeVisual(
                visibility=outside_visibility,
                opacity=outside_opacity,
                size=style.background_node_size,
                font_size=style.background_font_size,
            )

    edges: Dict[str, EdgeVisual] = {}
    for edge in graph.iter_edges():
        if edge.source in keep and edge.target in keep:
            edges[edge.id] = EdgeVisual(visibility=Visibility.SHOWN, opacity=1.0)
        else:
            edges[edge.id] = EdgeVisual(visibility=outside_visibility, opacity=outside_opacity)

    return ViewState(nodes=nodes, edges=edges)
