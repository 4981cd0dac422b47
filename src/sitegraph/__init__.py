"""
sitegraph - Semantic Site Graph Engine.

Turns a flat list of site URLs (with their images) into a typed graph
across several classification dimensions, and extracts bounded
neighborhoods of that graph for focused exploration.
"""

__version__ = "0.1.0"
