"""Readers that turn sitemap documents into Entries."""

from .sitemap import IngestError, load_entries, parse_entries_json, parse_sitemap

__all__ = ["IngestError", "load_entries", "parse_entries_json", "parse_sitemap"]
