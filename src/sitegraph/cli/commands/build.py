"""
Build Command - Parse a sitemap and build the semantic graph.
"""

import json
import logging
import sys
import time
from pathlib import Path

import click
from pydantic import BaseModel

from ...config import load_config
from ...core.builder import GraphBuilder
from ...core.errors import ConfigError
from ...ingest.sitemap import load_entries
from ..utils import DEFAULT_GRAPH_FILE, echo_error, echo_info, echo_success, json_envelope

logger = logging.getLogger(__name__)


# --- API Models ---
class BuildSummary(BaseModel):
    """
    Structured response for the build command.
    """
    entries_in: int
    duplicates_dropped: int
    degraded_urls: int
    pages: int
    images: int
    nodes: int
    edges: int
    output_path: str
    duration_sec: float


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=DEFAULT_GRAPH_FILE, help="Output graph JSON file")
@click.option("--assets", "assets_file", default=None, help="Also write a page -> images JSON map")
@click.option("-c", "--config", "config_file", default=None, help="Config YAML (default: .sitegraph/config.yaml)")
@click.option("--max-images", type=int, default=None, help="Image nodes per page")
@click.option("--no-cross-link", is_flag=True, help="Skip related edges between group members")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def build(
    input_file: str,
    output: str,
    assets_file: str | None,
    config_file: str | None,
    max_images: int | None,
    no_cross_link: bool,
    as_json: bool,
):
    """
    Build the site graph from a sitemap (.xml) or entry list (.json).
    """
    start = time.perf_counter()

    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigError as e:
        _fail(e, as_json)
        return

    result = load_entries(Path(input_file))
    if result.is_err():
        _fail(ValueError(result.error.message), as_json)
        return

    settings = config.build
    updates = {}
    if max_images is not None:
        updates["max_images_per_page"] = max(0, max_images)
    if no_cross_link:
        updates["cross_link"] = False
    if updates:
        settings = settings.model_copy(update=updates)
    logger.debug(f"Build settings: {settings.model_dump()}")

    outcome = GraphBuilder.from_settings(settings).build(result.unwrap())
    output_path = Path(output)
    outcome.graph.save(output_path)

    if assets_file:
        assets_path = Path(assets_file)
        assets_path.parent.mkdir(parents=True, exist_ok=True)
        assets_path.write_text(json.dumps(outcome.assets_map(), indent=2), encoding="utf-8")

    summary = BuildSummary(
        entries_in=outcome.stats.entries_in,
        duplicates_dropped=outcome.stats.duplicates_dropped,
        degraded_urls=outcome.stats.degraded_urls,
        pages=outcome.stats.pages,
        images=outcome.stats.images,
        nodes=outcome.graph.node_count,
        edges=outcome.graph.edge_count,
        output_path=str(output_path),
        duration_sec=round(time.perf_counter() - start, 3),
    )

    if as_json:
        click.echo(json_envelope("build", summary.model_dump()))
        return

    echo_success(f"Built graph: {summary.nodes} nodes, {summary.edges} edges")
    echo_info(f"{summary.pages} pages from {summary.entries_in} entries")
    if summary.duplicates_dropped:
        echo_info(f"{summary.duplicates_dropped} duplicate URLs dropped")
    if summary.degraded_urls:
        echo_info(f"{summary.degraded_urls} URLs could not be parsed (filed under (root))")
    echo_info(f"Wrote: {output_path}")
    if assets_file:
        echo_info(f"Wrote: {assets_file}")


def _fail(error: Exception, as_json: bool) -> None:
    if as_json:
        click.echo(json_envelope("build", error=error))
    else:
        echo_error(str(error))
    sys.exit(1)
