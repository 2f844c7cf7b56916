"""
PathFinder: name-based shortest-path queries over a link graph.

Usage:
    from wikipaths import PathFinder

    finder = PathFinder.from_files("data/articles.tsv", "data/links.tsv")
    finder.path("Albert_Einstein", "Pizza")
    finder.path_length("Albert_Einstein", "Pizza")
    finder.path_through("Albert_Einstein", "Physics", "Pizza")
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path as FilePath

from wikipaths.config import DEFAULT_MAX_WORKERS
from wikipaths.data.loader import LoadReport, load_graph, load_snapshot
from wikipaths.graph import GraphStore, Path, ShortestPathSearch, WaypointComposer

logger = logging.getLogger(__name__)


class PathFinder:
    """
    Answers path queries in terms of vertex names.

    Names are resolved to ids through the GraphStore before searching and
    results are returned as names. An unknown name raises
    UnknownVertexError; a missing path is returned as None (or -1 for
    lengths) and is never an error.

    Attributes:
        store: The frozen graph being queried
        load_report: Summary of the load, when built from files
    """

    def __init__(
        self,
        store: GraphStore,
        max_depth: int | None = None,
        load_report: LoadReport | None = None,
    ) -> None:
        """
        Initialize the finder.

        Args:
            store: Graph to query; frozen if it is not already
            max_depth: Optional hop limit applied to every search
            load_report: Load summary to keep alongside the graph
        """
        self._store = store
        self._search = ShortestPathSearch(store, max_depth=max_depth)
        self._composer = WaypointComposer(self._search)
        self.load_report = load_report

    @classmethod
    def from_files(
        cls,
        vertex_path: str | FilePath,
        edge_path: str | FilePath,
        strict: bool = False,
        max_depth: int | None = None,
    ) -> PathFinder:
        """Build a finder from a vertex file and an edge file."""
        store, report = load_graph(vertex_path, edge_path, strict=strict)
        return cls(store, max_depth=max_depth, load_report=report)

    @classmethod
    def from_snapshot(cls, path: str | FilePath, max_depth: int | None = None) -> PathFinder:
        """Build a finder from a msgpack link-graph snapshot."""
        return cls(load_snapshot(path), max_depth=max_depth)

    @property
    def store(self) -> GraphStore:
        return self._store

    # =========================================================================
    # Queries
    # =========================================================================

    def path(self, start: str, end: str) -> Path | None:
        """
        Find a shortest path from start to end.

        Returns:
            Path with start first and end last, or None if no path exists

        Raises:
            UnknownVertexError: If either name is not in the graph
        """
        start_idx = self._store.get_index(start)
        end_idx = self._store.get_index(end)
        return self._search.search(start_idx, end_idx)

    def path_length(self, start: str, end: str) -> int:
        """
        Number of edges on a shortest path from start to end.

        Returns 0 when start == end and -1 when no path exists.
        """
        path = self.path(start, end)
        if path is None:
            return -1
        return path.length

    def path_through(self, start: str, middle: str, end: str) -> Path | None:
        """
        Find a path from start to end that passes through middle.

        This is a shortest path to middle joined with a shortest path from
        middle, so it may be longer than the shortest walk that happens to
        visit middle somewhere else along the way.

        Returns:
            Joined path, or None if either half has no path

        Raises:
            UnknownVertexError: If any name is not in the graph
        """
        start_idx = self._store.get_index(start)
        mid_idx = self._store.get_index(middle)
        end_idx = self._store.get_index(end)
        return self._composer.search_through(start_idx, mid_idx, end_idx)

    def path_lengths(
        self,
        pairs: Iterable[tuple[str, str]],
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> list[int]:
        """
        Run path_length for many (start, end) pairs concurrently.

        Every query gets its own search state, so they share only the
        read-only store. Results are in input order. The first
        UnknownVertexError raised by any query propagates.
        """
        pairs = list(pairs)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda pair: self.path_length(*pair), pairs))

    # =========================================================================
    # Sampling
    # =========================================================================

    def random_vertices(self, k: int, rng: random.Random | None = None) -> list[str]:
        """
        Pick k vertex names uniformly at random, with replacement.

        Args:
            k: Number of names to pick
            rng: Random source (defaults to a fresh unseeded generator)
        """
        rng = rng or random.Random()
        names = self._store.names()
        return [names[rng.randrange(len(names))] for _ in range(k)]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._store!r})"
