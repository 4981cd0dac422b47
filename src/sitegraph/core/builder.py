"""
Graph Builder.

Turns a batch of Entries into the full site graph in one pass:

1. De-duplicate entries by canonical URL (first occurrence wins).
2. Emit the site anchor and one section node per distinct section.
3. Chain path-segment nodes under each section, memoized per section.
4. Attach one page node per entry at its deepest path segment.
5. Link pages into dimension groups (type, category, date).
6. Attach image nodes and external asset-host groups.
7. Optionally cross-link pages that share a group, with bounded fan-out.

All lookup tables live on a BuildContext that belongs to a single build()
call; nothing survives between builds.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from ..config import MAX_IMAGES_PER_PAGE, MAX_RELATED_EDGES_PER_PAGE, BuildSettings
from .classifier import UrlClassification, classify, host_of
from .graph import SiteGraph
from .identifiers import assign_id, edge_id
from .types import Edge, EdgeKind, Entry, Node, NodeKind

DEFAULT_SITE_LABEL = "site"

# The site anchor id never depends on the input
SITE_KEY = "site"


@dataclass
class BuildStats:
    entries_in: int = 0
    duplicates_dropped: int = 0
    degraded_urls: int = 0
    pages: int = 0
    images: int = 0
    images_truncated: int = 0
    groups: int = 0
    related_edges: int = 0


@dataclass
class BuildResult:
    graph: SiteGraph
    stats: BuildStats
    entries: List[Entry] = field(default_factory=list)

    def assets_map(self) -> Dict[str, List[str]]:
        """Page URL -> image URLs, for the de-duplicated entries."""
        return {entry.url: list(entry.images) for entry in self.entries}


@dataclass
class BuildContext:
    """Per-build lookup tables (key -> node id)."""
    graph: SiteGraph
    stats: BuildStats
    group_ids: Dict[Tuple[NodeKind, str], str] = field(default_factory=dict)
    group_order: List[str] = field(default_factory=list)
    path_ids: Dict[Tuple[str, str], str] = field(default_factory=dict)
    group_members: Dict[str, List[str]] = field(default_factory=lambda: defaultdict(list))

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> bool:
        return self.graph.add_edge(
            Edge(id=edge_id(kind, source, target), source=source, target=target, kind=kind)
        )

    def ensure_group(self, kind: NodeKind, key: str, label: str) -> str:
        """Return the group node for (kind, key), creating it on first use."""
        existing = self.group_ids.get((kind, key))
        if existing:
            return existing
        gid = assign_id(kind, key)
        self.group_ids[(kind, key)] = gid
        self.group_order.append(gid)
        self.graph.add_node(Node(id=gid, label=label, kind=kind))
        self.stats.groups += 1
        return gid

    def ensure_path(self, section: str, chain: List[str]) -> Tuple[str, bool]:
        """Return (node id, created) for a path prefix within a section."""
        key = "/".join(chain)
        existing = self.path_ids.get((section, key))
        if existing:
            return existing, False
        pid = assign_id(NodeKind.PATH_SEGMENT, f"{section}/{key}")
        self.path_ids[(section, key)] = pid
        self.graph.add_node(
            Node(id=pid, label=chain[-1], kind=NodeKind.PATH_SEGMENT, section=section)
        )
        return pid, True


def site_host(classifications: Iterable[UrlClassification]) -> str | None:
    """
    Most frequent host among parseable URLs, ties broken by the smallest
    name, so the answer does not depend on entry order.
    """
    counts = Counter(c.host for c in classifications if c.host and not c.degraded)
    if not counts:
        return None
    top = max(counts.values())
    return min(host for host, n in counts.items() if n == top)


def dedupe_entries(entries: Iterable[Entry]) -> Tuple[List[Entry], int]:
    """Drop repeated canonical URLs, keeping the first occurrence."""
    seen = set()
    unique: List[Entry] = []
    dropped = 0
    for entry in entries:
        if entry.url in seen:
            dropped += 1
            continue
        seen.add(entry.url)
        unique.append(entry)
    return unique, dropped


class GraphBuilder:
    """
    Builds a SiteGraph from Entries.

    Args:
        max_images_per_page: Image nodes emitted per page.
        max_related_edges_per_page: Fan-out cap for the cross-linking pass.
        cross_link: Whether to run the cross-linking pass at all.
    """

    def __init__(
        self,
        max_images_per_page: int = MAX_IMAGES_PER_PAGE,
        max_related_edges_per_page: int = MAX_RELATED_EDGES_PER_PAGE,
        cross_link: bool = True,
    ):
        self.max_images_per_page = max_images_per_page
        self.max_related_edges_per_page = max_related_edges_per_page
        self.cross_link = cross_link
        self._logger = logging.getLogger(f"{__name__}.GraphBuilder")

    @classmethod
    def from_settings(cls, settings: BuildSettings) -> "GraphBuilder":
        return cls(
            max_images_per_page=settings.max_images_per_page,
            max_related_edges_per_page=settings.max_related_edges_per_page,
            cross_link=settings.cross_link,
        )

    def build(self, entries: Iterable[Entry]) -> BuildResult:
        entries = list(entries)
        stats = BuildStats(entries_in=len(entries))
        unique, stats.duplicates_dropped = dedupe_entries(entries)

        ctx = BuildContext(graph=SiteGraph(), stats=stats)
        classified = [(entry, classify(entry.url)) for entry in unique]
        stats.degraded_urls = sum(1 for _, c in classified if c.degraded)

        site_id = self._add_site(ctx, site_host(info for _, info in classified))

        by_section: Dict[str, List[Tuple[Entry, UrlClassification]]] = defaultdict(list)
        for entry, info in classified:
            by_section[info.section].append((entry, info))

        for section in sorted(by_section):
            section_id = assign_id(NodeKind.SECTION, section)
            ctx.graph.add_node(Node(id=section_id, label=section, kind=NodeKind.SECTION))
            ctx.add_edge(site_id, section_id, EdgeKind.CONTAINS)

            for entry, info in sorted(by_section[section], key=lambda pair: pair[0].url):
                self._add_page(ctx, section, section_id, entry, info)

        if self.cross_link:
            self._cross_link(ctx)

        self._logger.info(
            f"Built graph: {ctx.graph.node_count} nodes, {ctx.graph.edge_count} edges "
            f"({stats.pages} pages, {stats.duplicates_dropped} duplicates dropped, "
            f"{stats.degraded_urls} degraded URLs)"
        )
        return BuildResult(graph=ctx.graph, stats=stats, entries=unique)

    # =========================================================================
    # Steps
    # =========================================================================

    def _add_site(self, ctx: BuildContext, host: str | None) -> str:
        label = host or DEFAULT_SITE_LABEL
        site_id = assign_id(NodeKind.SITE, SITE_KEY)
        ctx.graph.add_node(Node(
            id=site_id,
            label=label,
            kind=NodeKind.SITE,
            url=f"https://{host}" if host else None,
        ))
        return site_id

    def _add_page(
        self,
        ctx: BuildContext,
        section: str,
        section_id: str,
        entry: Entry,
        info: UrlClassification,
    ) -> None:
        parent = section_id
        rel = info.relative_segments
        for i in range(len(rel)):
            pid, _ = ctx.ensure_path(section, rel[:i + 1])
            ctx.add_edge(parent, pid, EdgeKind.CONTAINS)
            parent = pid

        page_id = assign_id(NodeKind.PAGE, entry.url)
        ctx.graph.add_node(Node(
            id=page_id,
            label=info.title,
            kind=NodeKind.PAGE,
            url=entry.url,
            section=section,
            category=info.category,
            date=info.year_month,
        ))
        ctx.add_edge(parent, page_id, EdgeKind.PAGE)
        ctx.stats.pages += 1

        self._add_memberships(ctx, section, page_id, info)
        self._add_images(ctx, section, page_id, entry, info)

    def _add_memberships(
        self, ctx: BuildContext, section: str, page_id: str, info: UrlClassification
    ) -> None:
        groups = [ctx.ensure_group(NodeKind.TYPE, section, f"type: {section}")]
        if info.category:
            groups.append(
                ctx.ensure_group(NodeKind.CATEGORY, info.category, f"category: {info.category}")
            )
        if info.year_month:
            groups.append(
                ctx.ensure_group(NodeKind.DATE, info.year_month, f"date: {info.year_month}")
            )
        for gid in groups:
            if ctx.add_edge(gid, page_id, EdgeKind.MEMBER):
                ctx.group_members[gid].append(page_id)

    def _add_images(
        self,
        ctx: BuildContext,
        section: str,
        page_id: str,
        entry: Entry,
        info: UrlClassification,
    ) -> None:
        images = entry.images[:self.max_images_per_page]
        if len(entry.images) > len(images):
            ctx.stats.images_truncated += len(entry.images) - len(images)

        external_hosts = set()
        for idx, img in enumerate(images):
            img_id = assign_id(NodeKind.IMAGE, f"{entry.url}#{idx}#{img}")
            ctx.graph.add_node(Node(
                id=img_id,
                label=f"img {idx + 1}",
                kind=NodeKind.IMAGE,
                url=img,
                image_url=img,
                section=section,
            ))
            ctx.add_edge(page_id, img_id, EdgeKind.ASSET)
            ctx.stats.images += 1

            host = host_of(img)
            if host and host != info.host:
                external_hosts.add(host)

        # Pages are linked by shared CDN, not images
        for host in sorted(external_hosts):
            hid = ctx.ensure_group(NodeKind.ASSET_HOST, host, f"asset host: {host}")
            ctx.add_edge(hid, page_id, EdgeKind.RELATED)

    def _cross_link(self, ctx: BuildContext) -> None:
        """
        Link consecutive pages (sorted by id) of each member group.

        Groups are visited in creation order and a page that reaches the cap
        is skipped for the rest of the pass, so earlier groups win the cap.
        """
        related_count: Dict[str, int] = defaultdict(int)
        cap = self.max_related_edges_per_page

        for gid in ctx.group_order:
            members = ctx.group_members.get(gid, [])
            if len(members) < 2:
                continue
            ordered = sorted(members)
            for a, b in zip(ordered, ordered[1:]):
                if related_count[a] >= cap or related_count[b] >= cap:
                    continue
                if ctx.add_edge(a, b, EdgeKind.RELATED):
                    related_count[a] += 1
                    related_count[b] += 1
                    ctx.stats.related_edges += 1


def build(entries: Iterable[Entry], **options) -> SiteGraph:
    """Build a SiteGraph from entries with default (or given) builder options."""
    return GraphBuilder(**options).build(entries).graph
