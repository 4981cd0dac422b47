"""
Stats Command - Summarize a built graph.
"""

import click
from rich.console import Console
from rich.table import Table

from ..utils import DEFAULT_GRAPH_FILE, json_envelope, load_graph

console = Console()


@click.command()
@click.option("-g", "--graph", "graph_file", default=DEFAULT_GRAPH_FILE, help="Graph JSON file or directory")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(graph_file: str, as_json: bool):
    """
    Show node and edge counts by kind.
    """
    graph = load_graph(graph_file)
    if graph is None:
        raise SystemExit(1)

    data = graph.get_stats()
    if as_json:
        click.echo(json_envelope("stats", data))
        return

    site = graph.site
    console.print(f"[bold]{site.label if site else 'site'}[/bold]: "
                  f"{data['total_nodes']} nodes, {data['total_edges']} edges")

    table = Table(show_header=True)
    table.add_column("Element")
    table.add_column("Kind", style="cyan")
    table.add_column("Count", justify="right")
    for kind, count in sorted(data["nodes_by_kind"].items()):
        table.add_row("node", kind, str(count))
    for kind, count in sorted(data["edges_by_kind"].items()):
        table.add_row("edge", kind, str(count))
    console.print(table)
