"""
Path value returned by shortest-path queries.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Path:
    """
    Ordered, non-empty sequence of vertex names.

    Consecutive names are joined by a direct edge in the graph the path was
    found in. A single-vertex path has length 0.

    Attributes:
        vertices: Vertex names from start to end
    """

    vertices: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.vertices:
            raise ValueError("A path must contain at least one vertex")

    @property
    def start(self) -> str:
        return self.vertices[0]

    @property
    def end(self) -> str:
        return self.vertices[-1]

    @property
    def length(self) -> int:
        """Number of edges traversed."""
        return len(self.vertices) - 1

    def join(self, other: Path) -> Path:
        """
        Append a path that starts where this one ends.

        The shared vertex appears once in the result.

        Raises:
            ValueError: If other does not start at this path's end
        """
        if other.start != self.end:
            raise ValueError(
                f"Cannot join path ending at {self.end!r} "
                f"with path starting at {other.start!r}"
            )
        return Path(self.vertices + other.vertices[1:])

    def to_list(self) -> list[str]:
        return list(self.vertices)

    def __iter__(self) -> Iterator[str]:
        return iter(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __getitem__(self, idx: int) -> str:
        return self.vertices[idx]

    def __str__(self) -> str:
        return " -> ".join(self.vertices)
