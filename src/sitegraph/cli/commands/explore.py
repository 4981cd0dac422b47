"""
Explore Command - Extract the neighborhood of a root node.
"""

import click
from rich.console import Console
from rich.table import Table

from ...analysis.explore import ExplorationRequest
from ...analysis.explore import explore as run_explore
from ...analysis.policy import DisplayMode
from ...core.errors import InvalidRootError
from ..utils import (
    DEFAULT_GRAPH_FILE,
    echo_error,
    echo_warning,
    json_envelope,
    load_config_or_exit,
    load_graph,
    resolve_root,
)

console = Console()


@click.command()
@click.argument("root")
@click.option("-g", "--graph", "graph_file", default=DEFAULT_GRAPH_FILE, help="Graph JSON file or directory")
@click.option("-d", "--depth", default=None, type=int, help="Hops from the root (clamped to 1-10)")
@click.option("-m", "--mode", default=None,
              type=click.Choice([m.value for m in DisplayMode]), help="How out-of-view elements are shown")
@click.option("--json", "as_json", is_flag=True, help="Output the full exploration response as JSON")
@click.option("-c", "--config", "config_file", default=None, help="Config YAML (default: .sitegraph/config.yaml)")
def explore(root: str, graph_file: str, depth: int | None, mode: str | None, as_json: bool, config_file: str | None):
    """
    Show the nodes within DEPTH hops of ROOT (an id or a label).
    """
    graph = load_graph(graph_file)
    if graph is None:
        raise SystemExit(1)

    config = load_config_or_exit(config_file)
    depth = config.explore.default_depth if depth is None else depth
    mode = mode or config.explore.default_mode

    root_id = resolve_root(graph, root) or root
    request = ExplorationRequest(root_id=root_id, max_depth=depth, mode=mode)

    try:
        response = run_explore(graph, request, style=config.style)
    except InvalidRootError as e:
        if as_json:
            click.echo(json_envelope("explore", error=e))
        else:
            echo_error(str(e))
            click.echo("Run 'sitegraph roots' to list valid roots.", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json_envelope("explore", response.model_dump(mode="json")))
        return

    if response.max_depth != depth:
        echo_warning(f"Depth {depth} clamped to {response.max_depth}")

    table = Table(title=f"Neighborhood of {graph.get_node(root_id).label} (depth {response.max_depth})")
    table.add_column("Depth", justify="right")
    table.add_column("Kind")
    table.add_column("Label", style="cyan")
    table.add_column("Size", justify="right")
    for node_id in sorted(response.keep, key=lambda nid: (response.depth[nid], nid)):
        node = graph.get_node(node_id)
        visual = response.nodes[node_id]
        table.add_row(str(response.depth[node_id]), node.kind.value, node.label, f"{visual.size:.1f}")
    console.print(table)

    shown_edges = sum(1 for v in response.edges.values() if v.visibility.value == "shown")
    console.print(f"[dim]{len(response.keep)} nodes, {shown_edges} edges in view ({response.mode.value})[/dim]")
