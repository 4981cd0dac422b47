"""Core graph model, classification and construction."""

from .errors import ConfigError, GraphIntegrityError, InvalidRootError, SiteGraphError
from .graph import SiteGraph
from .types import Edge, EdgeKind, Entry, Node, NodeKind, NodeRole

__all__ = [
    "ConfigError",
    "Edge",
    "EdgeKind",
    "Entry",
    "GraphIntegrityError",
    "InvalidRootError",
    "Node",
    "NodeKind",
    "NodeRole",
    "SiteGraph",
    "SiteGraphError",
]
