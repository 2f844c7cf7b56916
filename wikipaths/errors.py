"""
Exception hierarchy for graph construction and path queries.

A missing path is never an exception: searches return None for that case.
"""

from __future__ import annotations


class WikiPathsError(Exception):
    """Base class for all wikipaths errors."""


class UnknownVertexError(WikiPathsError, KeyError):
    """A vertex name or id was never registered in the graph."""

    def __init__(self, vertex: str | int) -> None:
        self.vertex = vertex
        super().__init__(vertex)

    def __str__(self) -> str:
        return f"Unknown vertex: {self.vertex!r}"


class DuplicateVertexError(WikiPathsError, ValueError):
    """A vertex name was registered twice."""

    def __init__(self, name: str, existing_id: int) -> None:
        self.name = name
        self.existing_id = existing_id
        super().__init__(f"Vertex {name!r} already registered with id {existing_id}")


class MalformedInputLineError(WikiPathsError, ValueError):
    """
    A vertex or edge source line has the wrong shape.

    Attributes:
        source: File (or other source label) the line came from
        line_number: 1-indexed line number within the source
        reason: Short description of what is wrong
    """

    def __init__(self, source: str, line_number: int, reason: str) -> None:
        self.source = source
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{source}:{line_number}: {reason}")


class GraphLoadError(WikiPathsError):
    """Graph sources could not be loaded at all."""


class GraphFrozenError(WikiPathsError):
    """Attempted to mutate a graph after construction finished."""


class SearchCancelledError(WikiPathsError):
    """A search was aborted through its cancellation event."""
