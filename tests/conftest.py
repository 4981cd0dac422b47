"""Shared fixtures: small site maps with known graph shapes."""

import pytest

from sitegraph.core.builder import GraphBuilder
from sitegraph.core.types import Entry

SCENARIO_URL = "https://ex.com/blog/2024/01/liquid-drop/"
SCENARIO_IMAGE = "https://cdn.ex.com/a.jpg"


@pytest.fixture
def scenario_entries():
    return [Entry(url=SCENARIO_URL, images=[SCENARIO_IMAGE])]


@pytest.fixture
def scenario_graph(scenario_entries):
    return GraphBuilder().build(scenario_entries).graph


@pytest.fixture
def site_entries():
    """Two sections, shared dates and categories, one CDN and one home page."""
    return [
        Entry(url="https://ex.com/", images=["https://ex.com/logo.png"]),
        Entry(url="https://ex.com/blog/2024/01/liquid-drop/", images=["https://cdn.ex.com/a.jpg"]),
        Entry(url="https://ex.com/blog/2024/01/neuro-funk/", images=["https://cdn.ex.com/b.jpg"]),
        Entry(url="https://ex.com/blog/category/events/"),
        Entry(url="https://ex.com/news/2024/01/lineup/", images=["https://cdn.ex.com/c.jpg"]),
        Entry(url="https://ex.com/news/category/events/"),
        Entry(url="https://ex.com/about/"),
    ]


@pytest.fixture
def site_graph(site_entries):
    return GraphBuilder().build(site_entries).graph
