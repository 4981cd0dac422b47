"""
Core type definitions for sitegraph.

Nodes are a tagged variant: every NodeKind carries a NodeRole that says
whether the node is a navigable entity or classification scaffolding.
Everything downstream asks `node.placeholder` instead of looking at labels.
"""

from enum import StrEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class NodeRole(StrEnum):
    """Whether a node is something a user can navigate to."""
    ENTITY = "entity"
    GROUP = "group"


class NodeKind(StrEnum):
    """Categories of nodes in the site graph."""
    SITE = "site"
    SECTION = "section"
    PATH_SEGMENT = "path_segment"
    PAGE = "page"
    IMAGE = "image"
    CATEGORY = "category"
    DATE = "date"
    ASSET_HOST = "asset_host"
    TYPE = "type"

    @property
    def role(self) -> NodeRole:
        if self in _GROUP_KINDS:
            return NodeRole.GROUP
        return NodeRole.ENTITY

    @property
    def is_group(self) -> bool:
        return self.role is NodeRole.GROUP


_GROUP_KINDS = frozenset({
    NodeKind.CATEGORY,
    NodeKind.DATE,
    NodeKind.ASSET_HOST,
    NodeKind.TYPE,
})


class EdgeKind(StrEnum):
    """Types of relationships between nodes."""
    CONTAINS = "contains"
    PAGE = "page"
    MEMBER = "member"
    ASSET = "asset"
    RELATED = "related"


class Node(BaseModel):
    """
    A typed vertex of the site graph.

    `id` is a pure function of (kind, semantic key), see
    `sitegraph.core.identifiers.assign_id`.
    """
    id: str = Field(min_length=1)
    label: str
    kind: NodeKind
    url: str | None = None
    image_url: str | None = None

    # Dimension tags
    section: str | None = None
    category: str | None = None
    date: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @computed_field
    @property
    def placeholder(self) -> bool:
        return self.kind.is_group

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Edge(BaseModel):
    """
    Directed relationship between two nodes.

    At most one edge exists per (kind, source, target) triple.
    """
    id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    kind: EdgeKind

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def triple(self) -> tuple:
        return (self.kind, self.source, self.target)

    def __hash__(self):
        return hash(self.id)


class Entry(BaseModel):
    """
    Input unit: one canonical URL and its ordered image URLs.
    """
    url: str
    images: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator("url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("entry url must not be empty")
        return value

    @field_validator("images")
    @classmethod
    def _dedupe_images(cls, value: List[str]) -> List[str]:
        seen = set()
        out = []
        for img in value:
            img = img.strip()
            if img and img not in seen:
                seen.add(img)
                out.append(img)
        return out
