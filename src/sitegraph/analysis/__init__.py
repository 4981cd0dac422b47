"""Neighborhood extraction and display policy for interactive exploration."""

from .explore import ExplorationRequest, ExplorationResponse, explore, root_candidates
from .extractor import Extraction, extract
from .policy import DisplayMode, Visibility, apply_policy
from .session import ExplorationSession

__all__ = [
    "DisplayMode",
    "ExplorationRequest",
    "ExplorationResponse",
    "ExplorationSession",
    "Extraction",
    "Visibility",
    "apply_policy",
    "explore",
    "extract",
    "root_candidates",
]
