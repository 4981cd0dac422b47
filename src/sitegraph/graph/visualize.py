"""
Visualization hand-off.

Packages one exploration view as a self-contained HTML page. Layout and
drawing are done in the browser by Cytoscape; every size, opacity and
visibility value is precomputed by the display policy and embedded as
element data. Clicking a node that carries a URL opens it.
"""

import json
import webbrowser
from pathlib import Path
from typing import Any, Dict, List

from ..analysis.explore import ExplorationResponse
from ..analysis.policy import Visibility
from ..core.graph import SiteGraph

KIND_COLORS = {
    "site": "#475569",
    "section": "#64748b",
    "path_segment": "#818cf8",
    "page": "#06b6d4",
    "image": "#fb923c",
    "category": "#a855f7",
    "date": "#22c55e",
    "asset_host": "#f59e0b",
    "type": "#94a3b8",
}

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://cdn.jsdelivr.net/npm/cytoscape@3/dist/cytoscape.min.js"></script>
    <style>
        :root {
            --bg-base: #f8fafc;
            --border-subtle: #e2e8f0;
            --text-primary: #0f172a;
            --text-secondary: #64748b;
            --font-sans: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        }
        * { box-sizing: border-box; }
        body {
            margin: 0;
            height: 100vh;
            display: flex;
            flex-direction: column;
            background: var(--bg-base);
            color: var(--text-primary);
            font-family: var(--font-sans);
        }
        .header {
            padding: 12px 16px;
            border-bottom: 1px solid var(--border-subtle);
            display: flex;
            gap: 16px;
            align-items: baseline;
        }
        .header .hint { color: var(--text-secondary); font-size: 13px; }
        #cy { flex: 1; }
    </style>
</head>
<body>
    <div class="header">
        <strong>__TITLE__</strong>
        <span class="hint">root: __ROOT__ &middot; depth __DEPTH__ &middot; __MODE__</span>
    </div>
    <div id="cy"></div>
    <script>
        const ELEMENTS = __GRAPH_DATA__;

        const cy = cytoscape({
            container: document.getElementById('cy'),
            elements: ELEMENTS,
            style: [
                {
                    selector: 'node',
                    style: {
                        'label': 'data(label)',
                        'width': 'data(size)',
                        'height': 'data(size)',
                        'font-size': 'data(fontSize)',
                        'opacity': 'data(opacity)',
                        'background-color': 'data(color)',
                        'text-valign': 'bottom',
                        'text-margin-y': 4
                    }
                },
                { selector: 'node.root', style: { 'border-width': 3, 'border-color': '#0f172a' } },
                { selector: '.hidden', style: { 'display': 'none' } },
                {
                    selector: 'edge',
                    style: {
                        'width': 1.5,
                        'opacity': 'data(opacity)',
                        'curve-style': 'bezier',
                        'target-arrow-shape': 'triangle',
                        'line-color': '#cbd5e1',
                        'target-arrow-color': '#cbd5e1'
                    }
                },
                { selector: 'edge[kind = "related"]', style: { 'line-style': 'dashed' } },
                { selector: 'edge[kind = "asset"]', style: { 'line-style': 'dotted' } }
            ],
            layout: { name: 'cose', animate: false }
        });

        cy.on('tap', 'node', (evt) => {
            const url = evt.target.data('url');
            if (url) window.open(url, '_blank');
        });
    </script>
</body>
</html>
"""


def build_elements(graph: SiteGraph, response: ExplorationResponse) -> List[Dict[str, Any]]:
    """Cytoscape element list carrying the precomputed visual state."""
    elements: List[Dict[str, Any]] = []

    for node in graph.iter_nodes():
        visual = response.nodes.get(node.id)
        if visual is None:
            continue
        classes = [node.kind.value]
        if visual.visibility is Visibility.HIDDEN:
            classes.append("hidden")
        if node.id == response.root_id:
            classes.append("root")
        data = {
            "id": node.id,
            "label": node.label,
            "kind": node.kind.value,
            "size": round(visual.size, 2),
            "fontSize": round(visual.font_size, 2),
            "opacity": visual.opacity,
            "color": KIND_COLORS.get(node.kind.value, "#94a3b8"),
        }
        if node.url:
            data["url"] = node.url
        elements.append({"group": "nodes", "data": data, "classes": " ".join(classes)})

    for edge in graph.iter_edges():
        visual = response.edges.get(edge.id)
        if visual is None:
            continue
        elements.append({
            "group": "edges",
            "data": {
                "id": edge.id,
                "source": edge.source,
                "target": edge.target,
                "kind": edge.kind.value,
                "opacity": visual.opacity,
            },
            "classes": "hidden" if visual.visibility is Visibility.HIDDEN else "",
        })

    return elements


def _escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")
    )


def generate_html(graph: SiteGraph, response: ExplorationResponse) -> str:
    """
    Generate the HTML content for one exploration view.
    """
    site = graph.site
    root = graph.get_node(response.root_id)
    title = f"{site.label if site else 'site'} sitemap"

    # Keep '</' out of the inline script
    json_data = json.dumps(build_elements(graph, response)).replace("</", "<\\/")

    return (
        HTML_TEMPLATE
        .replace("__TITLE__", _escape_html(title))
        .replace("__ROOT__", _escape_html(root.label if root else response.root_id))
        .replace("__DEPTH__", str(response.max_depth))
        .replace("__MODE__", response.mode.value)
        .replace("__GRAPH_DATA__", json_data)
    )


def write_visualization(
    graph: SiteGraph,
    response: ExplorationResponse,
    output_path: str = "view.html",
    open_browser: bool = False,
) -> str:
    """
    Write the view to disk and optionally open it in the browser.
    """
    html_content = generate_html(graph, response)
    out_file = Path(output_path)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(html_content, encoding="utf-8")

    if open_browser:
        webbrowser.open(out_file.resolve().as_uri())

    return str(out_file)
