"""
Breadth-first shortest-path search over a GraphStore.

Each call allocates its own frontier and predecessor table, so any number of
searches can run at once against the same frozen store.
"""

from __future__ import annotations

import logging
import threading
from collections import deque

import numpy as np

from wikipaths.errors import SearchCancelledError
from wikipaths.graph.path import Path
from wikipaths.graph.store import GraphStore

logger = logging.getLogger(__name__)

# Predecessor table sentinels
UNDISCOVERED = -1
ROOT = -2


class ShortestPathSearch:
    """
    Minimum-hop path search between two vertex ids.

    The traversal is rooted at the start vertex and stops as soon as the end
    vertex is discovered. Creating a search freezes the store, ending its
    construction phase.
    """

    def __init__(
        self,
        store: GraphStore,
        max_depth: int | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """
        Initialize the search.

        Args:
            store: Graph to search; frozen if it is not already
            max_depth: Optional hop limit; longer paths are reported as absent
            cancel: Optional event checked between frontier pops
        """
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        store.freeze()
        self._store = store
        self._max_depth = max_depth
        self._cancel = cancel

    @property
    def store(self) -> GraphStore:
        return self._store

    def search(self, start_idx: int, end_idx: int) -> Path | None:
        """
        Find a shortest path from start_idx to end_idx.

        Returns:
            Path of vertex names, or None if end is unreachable

        Raises:
            UnknownVertexError: If either id is not in the graph
            SearchCancelledError: If the cancel event was set mid-search
        """
        ids = self.search_ids(start_idx, end_idx)
        if ids is None:
            return None
        return Path(tuple(self._store.get_name(idx) for idx in ids))

    def search_ids(self, start_idx: int, end_idx: int) -> list[int] | None:
        """Same as search(), but returns the path as a list of ids."""
        # Resolve both ends before any traversal
        self._store.get_name(start_idx)
        self._store.get_name(end_idx)

        if start_idx == end_idx:
            return [start_idx]

        predecessors = np.full(self._store.vertex_count(), UNDISCOVERED, dtype=np.int64)
        predecessors[start_idx] = ROOT
        depths = None
        if self._max_depth is not None:
            depths = np.zeros(self._store.vertex_count(), dtype=np.int64)

        frontier = deque([start_idx])

        while frontier:
            if self._cancel is not None and self._cancel.is_set():
                raise SearchCancelledError(
                    f"Search from {start_idx} to {end_idx} cancelled"
                )

            current = frontier.popleft()
            if depths is not None and depths[current] >= self._max_depth:
                continue

            for neighbor in self._store.neighbors_of(current):
                if predecessors[neighbor] != UNDISCOVERED:
                    continue

                predecessors[neighbor] = current
                if depths is not None:
                    depths[neighbor] = depths[current] + 1

                if neighbor == end_idx:
                    return self._reconstruct(predecessors, end_idx)

                frontier.append(neighbor)

        logger.debug(f"No path from {start_idx} to {end_idx}")
        return None

    @staticmethod
    def _reconstruct(predecessors: np.ndarray, end_idx: int) -> list[int]:
        """Walk predecessor links back from end, then reverse."""
        path = [end_idx]
        idx = int(predecessors[end_idx])
        while idx != ROOT:
            path.append(idx)
            idx = int(predecessors[idx])
        path.reverse()
        return path
