"""
Roots Command - List nodes that can be explored as a root.
"""

import click
from rich.console import Console
from rich.table import Table

from ...analysis.explore import root_candidates
from ...core.types import NodeKind
from ..utils import DEFAULT_GRAPH_FILE, json_envelope, load_graph

console = Console()

_ENTITY_KINDS = [k.value for k in NodeKind if not k.is_group]


@click.command()
@click.option("-g", "--graph", "graph_file", default=DEFAULT_GRAPH_FILE, help="Graph JSON file or directory")
@click.option("-k", "--kind", "kinds", multiple=True, type=click.Choice(_ENTITY_KINDS),
              help="Node kinds to offer (default: section)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def roots(graph_file: str, kinds: tuple, as_json: bool):
    """
    List root candidates: the site's direct neighbors, sorted by label.
    """
    graph = load_graph(graph_file)
    if graph is None:
        raise SystemExit(1)

    candidates = root_candidates(graph, kinds) if kinds else root_candidates(graph)

    if as_json:
        click.echo(json_envelope("roots", [
            {"id": n.id, "label": n.label, "kind": n.kind.value} for n in candidates
        ]))
        return

    table = Table(title="Root candidates")
    table.add_column("Label", style="cyan")
    table.add_column("Kind")
    table.add_column("Id", style="dim")
    for node in candidates:
        table.add_row(node.label, node.kind.value, node.id)
    console.print(table)
