"""
Sitemap ingestion.

Reads a sitemap-with-images document (`<url><loc>` plus any number of
`<image:loc>`, plain or CDATA) or a JSON entry list into Entries. Tag
matching ignores XML namespaces so merged sitemaps with inconsistent
prefixes still parse.
"""

import json
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List

from pydantic import ValidationError

from ..core.result import Err, Ok, Result
from ..core.types import Entry

logger = logging.getLogger(__name__)


@dataclass
class IngestError:
    """Structured error for entry loading."""
    message: str
    path: str | None = None
    cause: Exception | None = None


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _text(elem: ET.Element) -> str:
    return (elem.text or "").strip()


def parse_sitemap(xml_text: str) -> List[Entry]:
    """
    Parse a sitemap document into Entries, in document order.

    Raises:
        xml.etree.ElementTree.ParseError: if the document is not well-formed.
    """
    root = ET.fromstring(xml_text)
    entries: List[Entry] = []

    for url_elem in root.iter():
        if _local(url_elem.tag) != "url":
            continue

        loc = ""
        images: List[str] = []
        for child in url_elem:
            name = _local(child.tag)
            if name == "loc" and not loc:
                loc = _text(child)
            elif name == "image":
                for sub in child:
                    if _local(sub.tag) == "loc" and _text(sub):
                        images.append(_text(sub))

        if not loc:
            logger.debug("Skipping <url> block without <loc>")
            continue
        entries.append(Entry(url=loc, images=images))

    return entries


def parse_entries_json(text: str) -> List[Entry]:
    """
    Parse `[{"url": ..., "images": [...]}, ...]` into Entries.

    Raises:
        ValueError: for malformed JSON or entries.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Entry file must contain a JSON list")
    return [Entry.model_validate(item) for item in data]


def load_entries(path: Path) -> Result[List[Entry], IngestError]:
    """
    Load Entries from a `.xml` sitemap or a `.json` entry list.

    Returns Ok(entries) or Err(IngestError); an input with no entries is
    an error.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(IngestError(f"Cannot read input: {e}", path=str(path), cause=e))

    try:
        if path.suffix.lower() == ".json":
            entries = parse_entries_json(text)
        else:
            entries = parse_sitemap(text)
    except ET.ParseError as e:
        return Err(IngestError(f"Malformed sitemap XML: {e}", path=str(path), cause=e))
    except (ValueError, ValidationError) as e:
        return Err(IngestError(f"Malformed entry list: {e}", path=str(path), cause=e))

    if not entries:
        return Err(IngestError("No <url><loc> entries found", path=str(path)))

    logger.info(f"Loaded {len(entries)} entries from {path}")
    return Ok(entries)
