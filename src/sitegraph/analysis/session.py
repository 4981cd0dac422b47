"""
Exploration Session.

Holds the read-only graph and the current view across user interactions
(root change, depth change, mode toggle, node click). Each interaction is
computed synchronously and independently; a rejected request leaves the
previous view in place.
"""

import logging
from typing import Optional

from ..config import DEFAULT_DEPTH, DEFAULT_MODE, StyleSettings
from ..core.errors import InvalidRootError
from ..core.graph import SiteGraph
from .explore import ExplorationRequest, ExplorationResponse, explore
from .policy import DisplayMode

logger = logging.getLogger(__name__)


class ExplorationSession:
    """
    Interactive drill-down over one built graph.
    """

    def __init__(
        self,
        graph: SiteGraph,
        depth: int = DEFAULT_DEPTH,
        mode: DisplayMode | str = DEFAULT_MODE,
        style: StyleSettings | None = None,
    ):
        self.graph = graph
        self.style = style
        self._depth = depth
        self._mode = DisplayMode(mode)
        self._view: Optional[ExplorationResponse] = None

    @property
    def view(self) -> Optional[ExplorationResponse]:
        """The last successfully computed view, if any."""
        return self._view

    @property
    def root_id(self) -> Optional[str]:
        return self._view.root_id if self._view else None

    def navigate(self, request: ExplorationRequest) -> ExplorationResponse:
        """
        Compute a new view. On InvalidRootError the current view is kept
        and the error is re-raised to the caller.
        """
        try:
            response = explore(self.graph, request, style=self.style)
        except InvalidRootError:
            logger.warning(f"Rejected root {request.root_id!r}; keeping previous view")
            raise
        self._view = response
        self._depth = response.max_depth
        self._mode = response.mode
        return response

    def set_root(self, root_id: str) -> ExplorationResponse:
        return self.navigate(
            ExplorationRequest(root_id=root_id, max_depth=self._depth, mode=self._mode)
        )

    def set_depth(self, depth: int) -> Optional[ExplorationResponse]:
        return self._refresh(max_depth=depth)

    def set_mode(self, mode: DisplayMode | str) -> Optional[ExplorationResponse]:
        return self._refresh(mode=DisplayMode(mode))

    def on_node_click(self, node_id: str) -> ExplorationResponse:
        """Renderer callback: drill into the clicked node."""
        return self.set_root(node_id)

    def _refresh(self, **changes) -> Optional[ExplorationResponse]:
        """Re-run the current root with changed settings."""
        if self._view is None:
            # No root yet: keep the setting for the first navigation
            if "max_depth" in changes:
                self._depth = changes["max_depth"]
            if "mode" in changes:
                self._mode = changes["mode"]
            return None
        request = ExplorationRequest(
            root_id=self._view.root_id,
            max_depth=changes.get("max_depth", self._depth),
            mode=changes.get("mode", self._mode),
        )
        return self.navigate(request)
