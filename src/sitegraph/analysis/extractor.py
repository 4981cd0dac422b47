"""
Subgraph Extraction.

Breadth-first search over the undirected view of the site graph, from a
root node out to a bounded number of hops. Grouping placeholders are never
admitted, and two structural rules keep a drill-down from leaking upward
or sideways:

- a `section` root never reaches the `site` node;
- from a `path_segment` or `section` node, another `section` node is only
  admitted if it is the root itself.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from ..config import MAX_DEPTH
from ..core.errors import InvalidRootError
from ..core.graph import SiteGraph
from ..core.types import Node, NodeKind

logger = logging.getLogger(__name__)

_STRUCTURAL_KINDS = frozenset({NodeKind.PATH_SEGMENT, NodeKind.SECTION})


@dataclass(frozen=True)
class Extraction:
    """Nodes in view and their BFS distance from the root."""
    root_id: str
    max_depth: int
    keep: FrozenSet[str] = field(default_factory=frozenset)
    depth: Dict[str, int] = field(default_factory=dict)


def clamp_depth(max_depth: int, lower: int = 0, upper: int = MAX_DEPTH) -> int:
    return max(lower, min(upper, int(max_depth)))


def _admissible(root: Node, current: Node, candidate: Node) -> bool:
    if candidate.placeholder:
        return False
    if root.kind is NodeKind.SECTION and candidate.kind is NodeKind.SITE:
        return False
    if (
        current.kind in _STRUCTURAL_KINDS
        and candidate.kind is NodeKind.SECTION
        and candidate.id != root.id
    ):
        return False
    return True


def extract(graph: SiteGraph, root_id: str, max_depth: int) -> Extraction:
    """
    Compute the bounded neighborhood of root_id.

    Args:
        graph: The built site graph (not modified).
        root_id: Id of the node to center on.
        max_depth: Hop bound, clamped into [0, MAX_DEPTH].

    Returns:
        Extraction with the kept node ids and their hop distance.

    Raises:
        InvalidRootError: if root_id is not in the graph.
    """
    root = graph.get_node(root_id)
    if root is None:
        raise InvalidRootError(root_id)

    bound = clamp_depth(max_depth)
    depth: Dict[str, int] = {root_id: 0}
    frontier = deque([root])

    while frontier:
        current = frontier.popleft()
        current_depth = depth[current.id]
        if current_depth >= bound:
            continue

        for neighbor_id in graph.neighbors_undirected(current.id):
            if neighbor_id in depth:
                continue
            candidate = graph.get_node(neighbor_id)
            if not _admissible(root, current, candidate):
                continue
            depth[neighbor_id] = current_depth + 1
            frontier.append(candidate)

    logger.debug(f"Extracted {len(depth)} nodes around {root_id} (depth {bound})")
    return Extraction(
        root_id=root_id,
        max_depth=bound,
        keep=frozenset(depth),
        depth=depth,
    )
