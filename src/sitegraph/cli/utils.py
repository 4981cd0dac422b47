"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, graph loading and root resolution used across the
sitegraph commands.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ..analysis.explore import root_candidates
from ..config import SiteGraphConfig, load_config
from ..core.errors import ConfigError, GraphIntegrityError
from ..core.graph import SiteGraph

DEFAULT_GRAPH_FILE = ".sitegraph/graph.json"


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message with a yellow alert symbol."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def json_envelope(command: str, data: Any = None, error: Exception | None = None) -> str:
    """Standard JSON output: {"meta": {...}, "data": ...} or {"meta": ..., "error": ...}."""
    payload: Dict[str, Any] = {"meta": {"command": command, "status": "error" if error else "success"}}
    if error is not None:
        payload["error"] = {"type": type(error).__name__, "message": str(error)}
    else:
        payload["data"] = data
    return json.dumps(payload, indent=2)


def load_graph(graph_file: str) -> Optional[SiteGraph]:
    """
    Load a SiteGraph from a file or directory path.

    A directory is resolved to `.sitegraph/graph.json` or `graph.json`
    inside it.

    Returns:
        Optional[SiteGraph]: The loaded graph, or None if loading failed
        (the reason has already been printed).
    """
    graph_path = Path(graph_file)

    if graph_path.is_dir():
        potential_files = [
            graph_path / ".sitegraph/graph.json",
            graph_path / "graph.json",
        ]
        for p in potential_files:
            if p.exists():
                graph_path = p
                break
        else:
            echo_error(f"No graph found in directory: {graph_file}")
            click.echo("Run 'sitegraph build <sitemap.xml>' first.", err=True)
            return None

    if not graph_path.exists():
        echo_error(f"Graph file not found: {graph_file}")
        click.echo("Run 'sitegraph build <sitemap.xml>' first to create it.", err=True)
        return None

    try:
        return SiteGraph.load(graph_path)
    except GraphIntegrityError as e:
        echo_error(f"Failed to load graph: {e}")
        return None


def resolve_root(graph: SiteGraph, value: str) -> Optional[str]:
    """
    Resolve a user-supplied root to a node id.

    Tries, in order: exact id, case-insensitive label among root
    candidates, then the first non-placeholder node with that label.
    """
    if graph.has_node(value):
        return value

    wanted = value.strip().lower()
    for node in root_candidates(graph):
        if node.label.lower() == wanted:
            return node.id

    for node in graph.iter_nodes():
        if not node.placeholder and node.label.lower() == wanted:
            return node.id

    return None


def load_config_or_exit(config_file: str | None) -> SiteGraphConfig:
    """Load configuration, printing the problem and exiting on a bad file."""
    try:
        return load_config(Path(config_file) if config_file else None)
    except ConfigError as e:
        echo_error(str(e))
        raise SystemExit(1)
