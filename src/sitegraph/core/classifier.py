"""
URL Classifier.

Pure functions that derive structural and semantic attributes from a
single URL. Classification never raises: a URL that cannot be parsed
degrades to an empty path in the `(root)` section, titled by the raw text.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List
from urllib.parse import SplitResult, unquote, urlsplit

logger = logging.getLogger(__name__)

ROOT_SECTION = "(root)"
HOME_TITLE = "Home"
CATEGORY_MARKER = "category"
DEFAULT_PORTS = {"http": 80, "https": 443}

_YEAR_RE = re.compile(r"^\d{4}$")
_MONTH_RE = re.compile(r"^\d{2}$")


@dataclass(frozen=True)
class UrlClassification:
    """Attributes derived from one URL."""
    url: str
    segments: List[str] = field(default_factory=list)
    section: str = ROOT_SECTION
    title: str = HOME_TITLE
    host: str | None = None
    category: str | None = None
    year_month: str | None = None
    degraded: bool = False

    @property
    def relative_segments(self) -> List[str]:
        """Segments below the section."""
        return list(self.segments[1:])


def path_segments(path: str) -> List[str]:
    """Split a URL path on '/', dropping empty components."""
    return [seg for seg in path.split("/") if seg]


def title_from_segments(segments: List[str]) -> str:
    if not segments:
        return HOME_TITLE
    return unquote(segments[-1]).replace("-", " ")


def find_category(segments: List[str]) -> str | None:
    """Segment following a literal 'category' segment, lower-cased."""
    for i, seg in enumerate(segments[:-1]):
        if seg == CATEGORY_MARKER:
            return segments[i + 1].lower()
    return None


def find_year_month(segments: List[str]) -> str | None:
    """
    Return 'YYYY/MM' when the path starts with a year/month pair, either at
    the very beginning or right after the section segment.
    """
    for offset in (0, 1):
        pair = segments[offset:offset + 2]
        if len(pair) == 2 and _YEAR_RE.match(pair[0]) and _MONTH_RE.match(pair[1]):
            return f"{pair[0]}/{pair[1]}"
    return None


def _host(parts: SplitResult) -> str | None:
    """
    Lower-cased host without userinfo, keeping the port only when it is not
    the scheme's default.

    Raises:
        ValueError: if the port is not a valid number.
    """
    host = parts.hostname
    if not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(parts.scheme.lower()):
        return f"{host}:{port}"
    return host


def host_of(url: str) -> str | None:
    """Host of a URL, or None when it has none or is malformed."""
    try:
        return _host(urlsplit(url.strip()))
    except ValueError:
        return None


def _degraded(url: str) -> UrlClassification:
    logger.debug(f"Could not parse URL, using degraded classification: {url!r}")
    return UrlClassification(url=url, title=url, degraded=True)


def classify(url: str) -> UrlClassification:
    """
    Classify a URL into segments, section, category, year/month and title.
    """
    try:
        parts = urlsplit(url.strip())
        host = _host(parts)
    except ValueError:
        return _degraded(url)

    if not parts.scheme or not host:
        return _degraded(url)

    segments = path_segments(parts.path)

    return UrlClassification(
        url=url,
        segments=segments,
        section=segments[0] if segments else ROOT_SECTION,
        title=title_from_segments(segments),
        host=host,
        category=find_category(segments),
        year_month=find_year_month(segments),
    )
