"""
Exploration requests and responses.

An exploration request names a root, a depth and a display mode; the
response carries the per-node and per-edge visual state handed to the
renderer. Depth outside [MIN_DEPTH, MAX_DEPTH] is clamped, not rejected,
and the effective depth is echoed back so the caller can see the clamp.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import DEFAULT_DEPTH, DEFAULT_MODE, MAX_DEPTH, MIN_DEPTH, StyleSettings
from ..core.errors import InvalidRootError
from ..core.graph import SiteGraph
from ..core.types import Node, NodeKind
from .extractor import clamp_depth, extract
from .policy import DisplayMode, EdgeVisual, NodeVisual, apply_policy

logger = logging.getLogger(__name__)

DEFAULT_ROOT_KINDS: FrozenSet[NodeKind] = frozenset({NodeKind.SECTION})


class ExplorationRequest(BaseModel):
    root_id: str
    max_depth: int = DEFAULT_DEPTH
    mode: DisplayMode = DisplayMode(DEFAULT_MODE)

    model_config = ConfigDict(frozen=True)

    @field_validator("max_depth")
    @classmethod
    def _clamp(cls, value: int) -> int:
        clamped = clamp_depth(value, MIN_DEPTH, MAX_DEPTH)
        if clamped != value:
            logger.info(f"Depth {value} clamped to {clamped} (allowed {MIN_DEPTH}-{MAX_DEPTH})")
        return clamped


class ExplorationResponse(BaseModel):
    """Visual state of the whole graph for one exploration request."""
    root_id: str
    max_depth: int
    mode: DisplayMode
    keep: List[str] = Field(default_factory=list)
    depth: Dict[str, int] = Field(default_factory=dict)
    nodes: Dict[str, NodeVisual] = Field(default_factory=dict)
    edges: Dict[str, EdgeVisual] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


def explore(
    graph: SiteGraph,
    request: ExplorationRequest,
    style: StyleSettings | None = None,
) -> ExplorationResponse:
    """
    Run extraction and the display policy for one request.

    Raises:
        InvalidRootError: unknown root, or a grouping placeholder as root.
            Nothing is computed in that case.
    """
    root = graph.get_node(request.root_id)
    if root is None:
        raise InvalidRootError(request.root_id)
    if root.placeholder:
        raise InvalidRootError(request.root_id, f"{root.kind.value} groups are not navigable")

    extraction = extract(graph, request.root_id, request.max_depth)
    view = apply_policy(
        graph,
        extraction.keep,
        extraction.depth,
        request.root_id,
        request.mode,
        style=style,
    )
    return ExplorationResponse(
        root_id=request.root_id,
        max_depth=extraction.max_depth,
        mode=request.mode,
        keep=sorted(extraction.keep),
        depth=dict(extraction.depth),
        nodes=view.nodes,
        edges=view.edges,
    )


def root_candidates(
    graph: SiteGraph,
    kinds: Iterable[NodeKind] = DEFAULT_ROOT_KINDS,
) -> List[Node]:
    """
    Nodes a user may pick as root: non-placeholder direct neighbors of the
    site node, restricted to `kinds`, sorted by label.
    """
    site = graph.site
    if site is None:
        return []
    allowed = {NodeKind(k) for k in kinds}
    candidates = []
    for neighbor_id in graph.neighbors_undirected(site.id):
        node = graph.get_node(neighbor_id)
        if node.placeholder or node.kind not in allowed:
            continue
        candidates.append(node)
    return sorted(candidates, key=lambda n: (n.label.lower(), n.id))
