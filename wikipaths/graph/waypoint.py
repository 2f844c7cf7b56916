"""
Waypoint-constrained paths built from two independent searches.
"""

from __future__ import annotations

import logging

from wikipaths.graph.path import Path
from wikipaths.graph.search import ShortestPathSearch

logger = logging.getLogger(__name__)


class WaypointComposer:
    """
    Builds a path from start to end that passes through a waypoint.

    The result is a shortest path to the waypoint followed by a shortest path
    from it. This is the shortest route that splits at the waypoint, which is
    not necessarily the shortest walk that happens to visit it: the two halves
    may share vertices, and no other split point is considered.
    """

    def __init__(self, search: ShortestPathSearch) -> None:
        self._search = search

    def search_through(self, start_idx: int, mid_idx: int, end_idx: int) -> Path | None:
        """
        Find a path from start_idx to end_idx via mid_idx.

        Returns:
            Joined path, or None if either half has no path

        Raises:
            UnknownVertexError: If any id is not in the graph
        """
        # Resolve all three up front so an unknown end is never masked by a
        # missing first half
        store = self._search.store
        for idx in (start_idx, mid_idx, end_idx):
            store.get_name(idx)

        first = self._search.search(start_idx, mid_idx)
        if first is None:
            logger.debug(f"No path from {start_idx} to waypoint {mid_idx}")
            return None

        second = self._search.search(mid_idx, end_idx)
        if second is None:
            logger.debug(f"No path from waypoint {mid_idx} to {end_idx}")
            return None

        return first.join(second)
