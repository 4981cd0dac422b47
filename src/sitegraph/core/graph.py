"""
Site Graph container backed by rustworkx.

It manages:
- The bimap between string node ids and rustworkx integer indices.
- Edge de-duplication by (kind, source, target).
- Undirected neighborhood lookups used by subgraph extraction.
- Lossless export to, and validated import from, a plain dict document.

The graph is populated once by the builder and treated as read-only
afterwards.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

import rustworkx as rx
from pydantic import ValidationError

from .errors import GraphIntegrityError
from .identifiers import edge_id
from .types import Edge, EdgeKind, Node, NodeKind

logger = logging.getLogger(__name__)


class SiteGraph:
    """
    Typed, directed multigraph of site nodes.

    Features:
    - O(1) node lookup via id-to-index bimap
    - At most one edge per (kind, source, target)
    - Insertion-ordered iteration, so exports are reproducible
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=True)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}
        self._nodes_by_kind: Dict[NodeKind, List[str]] = defaultdict(list)
        self._edge_triples: Set[Tuple[EdgeKind, str, str]] = set()

    # =========================================================================
    # Mutation (builder / import only)
    # =========================================================================

    def add_node(self, node: Node) -> bool:
        """
        Add a node. Returns False if a node with this id already exists.
        """
        if node.id in self._id_to_idx:
            return False
        idx = self._graph.add_node(node)
        self._id_to_idx[node.id] = idx
        self._idx_to_id[idx] = node.id
        self._nodes_by_kind[node.kind].append(node.id)
        return True

    def add_edge(self, edge: Edge) -> bool:
        """
        Add a directed edge. Returns False when the (kind, source, target)
        triple is already present or an endpoint is unknown.
        """
        if edge.triple in self._edge_triples:
            return False
        if edge.source not in self._id_to_idx or edge.target not in self._id_to_idx:
            logger.debug(f"Dropping edge {edge.id} with unknown endpoint")
            return False

        u_idx = self._id_to_idx[edge.source]
        v_idx = self._id_to_idx[edge.target]
        self._graph.add_edge(u_idx, v_idx, edge)
        self._edge_triples.add(edge.triple)
        return True

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[Node]:
        """Retrieve a node by id."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def has_edge(self, kind: EdgeKind, source: str, target: str) -> bool:
        return (EdgeKind(kind), source, target) in self._edge_triples

    def get_nodes_by_kind(self, kind: NodeKind) -> List[Node]:
        """Nodes of one kind, in insertion order."""
        return [self.get_node(nid) for nid in self._nodes_by_kind.get(kind, [])]

    @property
    def site(self) -> Optional[Node]:
        """The single site anchor node."""
        ids = self._nodes_by_kind.get(NodeKind.SITE, [])
        return self.get_node(ids[0]) if ids else None

    def neighbors_undirected(self, node_id: str) -> List[str]:
        """
        Ids of nodes adjacent to node_id when edge direction is ignored,
        sorted for stable traversal order.
        """
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        neighbor_indices = set(self._graph.successor_indices(idx))
        neighbor_indices.update(self._graph.predecessor_indices(idx))
        neighbor_indices.discard(idx)
        return sorted(self._idx_to_id[i] for i in neighbor_indices)

    def edges_between(self, a: str, b: str) -> List[Edge]:
        """Edges connecting a and b in either direction."""
        if a not in self._id_to_idx or b not in self._id_to_idx:
            return []
        u = self._id_to_idx[a]
        v = self._id_to_idx[b]
        found = list(self._graph.get_all_edge_data(u, v)) if self._graph.has_edge(u, v) else []
        if u != v and self._graph.has_edge(v, u):
            found.extend(self._graph.get_all_edge_data(v, u))
        return found

    def iter_nodes(self) -> Iterator[Node]:
        return iter(self._graph.nodes())

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self._graph.edges())

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, Any]:
        node_counts = {
            kind.value: len(ids) for kind, ids in self._nodes_by_kind.items() if ids
        }
        edge_counts: Dict[str, int] = defaultdict(int)
        for edge in self.iter_edges():
            edge_counts[edge.kind.value] += 1

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "nodes_by_kind": node_counts,
            "edges_by_kind": dict(edge_counts),
            "placeholder_nodes": sum(1 for n in self.iter_nodes() if n.placeholder),
            "backend": "rustworkx",
        }

    # =========================================================================
    # Export / Import
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Export as `{"nodes": [{"data": ...}], "edges": [{"data": ...}]}`.
        """
        return {
            "nodes": [
                {"data": node.model_dump(mode="json", exclude_none=True)}
                for node in self.iter_nodes()
            ],
            "edges": [
                {"data": edge.model_dump(mode="json")}
                for edge in self.iter_edges()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteGraph":
        """
        Rebuild a graph from an exported document.

        Raises:
            GraphIntegrityError: if the document is malformed or inconsistent
                (missing endpoints, duplicate ids or triples, no single site).
        """
        if not isinstance(data, dict):
            raise GraphIntegrityError("Graph document must be an object")

        raw_nodes = data.get("nodes")
        raw_edges = data.get("edges")
        if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
            raise GraphIntegrityError("Graph document needs 'nodes' and 'edges' lists")

        problems: List[str] = []
        nodes: List[Node] = []
        edges: List[Edge] = []

        for i, item in enumerate(raw_nodes):
            try:
                nodes.append(Node.model_validate(_unwrap(item)))
            except (ValidationError, TypeError) as e:
                problems.append(f"nodes[{i}]: {_first_error(e)}")

        for i, item in enumerate(raw_edges):
            try:
                edges.append(Edge.model_validate(_unwrap(item)))
            except (ValidationError, TypeError) as e:
                problems.append(f"edges[{i}]: {_first_error(e)}")

        if problems:
            raise GraphIntegrityError("Invalid graph elements", problems)

        graph = cls()
        for node in nodes:
            if not graph.add_node(node):
                problems.append(f"duplicate node id {node.id}")

        site_count = len(graph._nodes_by_kind.get(NodeKind.SITE, []))
        if site_count != 1:
            problems.append(f"expected exactly one site node, found {site_count}")

        seen_edge_ids: Set[str] = set()
        for edge in edges:
            if edge.id in seen_edge_ids:
                problems.append(f"duplicate edge id {edge.id}")
                continue
            seen_edge_ids.add(edge.id)
            missing = [end for end in (edge.source, edge.target) if not graph.has_node(end)]
            if missing:
                problems.append(f"edge {edge.id} references missing node(s) {', '.join(missing)}")
                continue
            if not graph.add_edge(edge):
                problems.append(
                    f"duplicate edge ({edge.kind.value}, {edge.source}, {edge.target})"
                )
                continue
            if edge.id != edge_id(edge.kind, edge.source, edge.target):
                problems.append(f"edge id {edge.id} does not match its (kind, source, target)")

        if problems:
            raise GraphIntegrityError("Graph failed integrity checks", problems)

        return graph

    def save(self, path: Path) -> None:
        """Write the export document as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "SiteGraph":
        """
        Read an export document from disk.

        Raises:
            GraphIntegrityError: if the file is not valid JSON or fails validation.
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise GraphIntegrityError(f"Graph file is not valid JSON: {e}") from e
        return cls.from_dict(data)


def _unwrap(item: Any) -> Any:
    """Accept both `{"data": {...}}` wrappers and bare element dicts."""
    if isinstance(item, dict) and isinstance(item.get("data"), dict):
        return item["data"]
    return item


def _first_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        err = exc.errors()[0]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))
    return str(exc)
