"""
GraphStore: the vertex name <-> id mapping and directed adjacency relation.

Usage:
    from wikipaths.graph import GraphStore

    store = GraphStore()
    store.register_vertex("Physics")
    store.register_vertex("Mathematics")
    store.add_edge("Physics", "Mathematics")
    store.freeze()

    store.neighbors_of(store.get_index("Physics"))
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

import numpy as np

from wikipaths.errors import DuplicateVertexError, GraphFrozenError, UnknownVertexError

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Directed, unweighted graph over densely numbered, named vertices.

    The store has two phases. While building, vertices and edges are added
    one at a time into per-vertex adjacency lists. freeze() ends the build
    phase: adjacency is compacted into CSR arrays and all further writes are
    rejected, which makes a frozen store safe to share between threads.

    Attributes:
        names: Vertex names indexed by id (registration order)
        is_frozen: Whether the build phase has ended
    """

    def __init__(self) -> None:
        self._names: list[str] = []
        self._name_to_idx: dict[str, int] = {}
        self._adjacency: list[list[int]] = []
        self._edge_count = 0

        # CSR arrays, populated by freeze()
        self._offsets: np.ndarray | None = None
        self._targets: np.ndarray | None = None

    # =========================================================================
    # Construction
    # =========================================================================

    def register_vertex(self, name: str) -> int:
        """
        Assign the next sequential id to a new vertex name.

        Raises:
            DuplicateVertexError: If the name is already registered
            GraphFrozenError: If the store has been frozen
        """
        self._check_writable()
        existing = self._name_to_idx.get(name)
        if existing is not None:
            raise DuplicateVertexError(name, existing)

        idx = len(self._names)
        self._names.append(name)
        self._name_to_idx[name] = idx
        self._adjacency.append([])
        return idx

    def add_edge(self, from_name: str, to_name: str) -> None:
        """
        Record a directed edge between two registered vertices.

        Duplicate edges are kept; they do not change hop-count distances.

        Raises:
            UnknownVertexError: If either name is unregistered
            GraphFrozenError: If the store has been frozen
        """
        self._check_writable()
        from_idx = self.get_index(from_name)
        to_idx = self.get_index(to_name)
        self._adjacency[from_idx].append(to_idx)
        self._edge_count += 1

    def add_edge_by_idx(self, from_idx: int, to_idx: int) -> None:
        """Record a directed edge between two ids (used by snapshot loading)."""
        self._check_writable()
        self._check_idx(from_idx)
        self._check_idx(to_idx)
        self._adjacency[from_idx].append(to_idx)
        self._edge_count += 1

    def freeze(self) -> None:
        """End the build phase. Safe to call more than once."""
        if self.is_frozen:
            return

        counts = np.fromiter(
            (len(links) for links in self._adjacency),
            dtype=np.int64,
            count=len(self._adjacency),
        )
        offsets = np.zeros(len(self._adjacency) + 1, dtype=np.int64)
        np.cumsum(counts, out=offsets[1:])

        targets = np.fromiter(
            (target for links in self._adjacency for target in links),
            dtype=np.int64,
            count=self._edge_count,
        )

        self._offsets = offsets
        self._targets = targets
        # The lists are no longer needed once compacted
        self._adjacency = []

        logger.info(
            f"Graph frozen with {self.vertex_count():,} vertices "
            f"and {self._edge_count:,} edges"
        )

    @property
    def is_frozen(self) -> bool:
        return self._offsets is not None

    def _check_writable(self) -> None:
        if self.is_frozen:
            raise GraphFrozenError("Graph is frozen; construction has already finished")

    def _check_idx(self, idx: int) -> None:
        if not 0 <= idx < len(self._names):
            raise UnknownVertexError(idx)

    # =========================================================================
    # Core Accessors
    # =========================================================================

    def get_index(self, name: str) -> int:
        """
        Get the id for a vertex name.

        Raises:
            UnknownVertexError: If the name was never registered
        """
        idx = self._name_to_idx.get(name)
        if idx is None:
            raise UnknownVertexError(name)
        return idx

    def get_name(self, idx: int) -> str:
        """
        Get the vertex name for an id.

        Raises:
            UnknownVertexError: If the id is out of range
        """
        self._check_idx(idx)
        return self._names[idx]

    def has_vertex(self, name: str) -> bool:
        """Check if a vertex name is registered."""
        return name in self._name_to_idx

    def neighbors_of(self, idx: int) -> Sequence[int]:
        """
        Get the ids reachable from idx by one outgoing edge.

        Raises:
            UnknownVertexError: If the id is out of range
        """
        self._check_idx(idx)
        if self._offsets is not None:
            return self._targets[self._offsets[idx]:self._offsets[idx + 1]]
        return self._adjacency[idx]

    def vertex_count(self) -> int:
        """Total number of registered vertices."""
        return len(self._names)

    def edge_count(self) -> int:
        """Total number of edges, duplicates included."""
        return self._edge_count

    def names(self) -> list[str]:
        """All vertex names in id order."""
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._name_to_idx

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(vertices={self.vertex_count()}, "
            f"edges={self._edge_count}, frozen={self.is_frozen})"
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _out_degrees(self) -> np.ndarray:
        if self._offsets is not None:
            return np.diff(self._offsets)
        return np.array([len(links) for links in self._adjacency], dtype=np.int64)

    def validate(self) -> dict[str, bool]:
        """Run consistency checks on the id mapping and adjacency."""
        ids_contiguous = sorted(self._name_to_idx.values()) == list(range(len(self._names)))
        bijective = all(
            self._name_to_idx.get(name) == idx for idx, name in enumerate(self._names)
        )

        if self._targets is not None:
            targets = self._targets
        else:
            targets = np.fromiter(
                (t for links in self._adjacency for t in links), dtype=np.int64
            )
        edges_in_range = bool(
            targets.size == 0
            or (targets.min() >= 0 and targets.max() < len(self._names))
        )

        return {
            "ids_contiguous": ids_contiguous,
            "names_bijective": bijective and len(self._name_to_idx) == len(self._names),
            "edges_in_range": edges_in_range,
            "edge_count_correct": int(self._out_degrees().sum()) == self._edge_count,
        }

    def stats(self) -> dict:
        """Get statistics about the graph."""
        degrees = self._out_degrees()
        return {
            "total_vertices": self.vertex_count(),
            "total_edges": self._edge_count,
            "traversable_vertices": int(np.count_nonzero(degrees)),
            "max_out_degree": int(degrees.max()) if degrees.size else 0,
            "frozen": self.is_frozen,
        }
