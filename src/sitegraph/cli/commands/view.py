"""
View Command - Write an exploration view as an interactive HTML page.
"""

import click

from ...analysis.explore import ExplorationRequest, explore
from ...analysis.policy import DisplayMode
from ...core.errors import InvalidRootError
from ...graph.visualize import write_visualization
from ..utils import (
    DEFAULT_GRAPH_FILE,
    echo_error,
    echo_info,
    echo_success,
    load_config_or_exit,
    load_graph,
    resolve_root,
)


@click.command()
@click.argument("root")
@click.option("-g", "--graph", "graph_file", default=DEFAULT_GRAPH_FILE, help="Graph JSON file or directory")
@click.option("-d", "--depth", default=None, type=int, help="Hops from the root (clamped to 1-10)")
@click.option("-m", "--mode", default=None,
              type=click.Choice([m.value for m in DisplayMode]), help="How out-of-view elements are shown")
@click.option("-o", "--output", default="sitegraph.html", help="Output HTML file")
@click.option("--open", "open_browser", is_flag=True, help="Open the page in a browser")
@click.option("-c", "--config", "config_file", default=None, help="Config YAML (default: .sitegraph/config.yaml)")
def view(
    root: str,
    graph_file: str,
    depth: int | None,
    mode: str | None,
    output: str,
    open_browser: bool,
    config_file: str | None,
):
    """
    Render the neighborhood of ROOT to an HTML page.
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
        response = explore(graph, request, style=config.style)
    except InvalidRootError as e:
        echo_error(str(e))
        raise SystemExit(1)

    path = write_visualization(graph, response, output, open_browser=open_browser)
    echo_success(f"Generated: {path}")
    echo_info(f"{len(response.keep)} nodes in view")
