"""Fixtures shared by the CLI tests."""

import pytest
from click.testing import CliRunner

SITEMAP = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
        xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">
  <url><loc>https://ex.com/</loc></url>
  <url>
    <loc>https://ex.com/blog/2024/01/liquid-drop/</loc>
    <image:image><image:loc>https://cdn.ex.com/a.jpg</image:loc></image:image>
  </url>
  <url>
    <loc>https://ex.com/blog/2024/01/liquid-drop/</loc>
  </url>
  <url><loc>https://ex.com/news/2024/01/lineup/</loc></url>
</urlset>
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sitemap_file(tmp_path):
    path = tmp_path / "sitemap.xml"
    path.write_text(SITEMAP, encoding="utf-8")
    return path


@pytest.fixture
def graph_file(tmp_path, site_graph):
    path = tmp_path / ".sitegraph" / "graph.json"
    site_graph.save(path)
    return path
