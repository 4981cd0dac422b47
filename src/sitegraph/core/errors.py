"""
Exception hierarchy for sitegraph.

Malformed URLs and duplicate entries are recovered locally and never
show up here; these exceptions are the failures a caller must handle.
"""

from typing import List


class SiteGraphError(Exception):
    """Base class for all sitegraph errors."""


class InvalidRootError(SiteGraphError):
    """
    Raised when an exploration names a root that cannot be explored.

    Attributes:
        root_id: The requested root id.
        reason: Human-readable explanation.
    """

    def __init__(self, root_id: str, reason: str = "unknown node id"):
        self.root_id = root_id
        self.reason = reason
        super().__init__(f"Invalid root '{root_id}': {reason}")


class GraphIntegrityError(SiteGraphError):
    """
    Raised when an imported graph document is structurally inconsistent.

    Attributes:
        message: Summary of the failure.
        details: Individual violations found while validating.
    """

    def __init__(self, message: str, details: List[str] | None = None):
        self.message = message
        self.details = list(details or [])
        if self.details:
            shown = "; ".join(self.details[:5])
            more = f" (+{len(self.details) - 5} more)" if len(self.details) > 5 else ""
            super().__init__(f"{message}: {shown}{more}")
        else:
            super().__init__(message)


class ConfigError(SiteGraphError):
    """Raised when a configuration file cannot be read or validated."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Config '{path}': {message}")
