"""
Graph module.

Provides the link graph and shortest-path search over it:
- GraphStore: Name/id mapping and directed adjacency
- Path: Ordered vertex names returned by searches
- ShortestPathSearch: Breadth-first minimum-hop search
- WaypointComposer: Paths forced through an intermediate vertex
"""

from wikipaths.graph.path import Path
from wikipaths.graph.search import ShortestPathSearch
from wikipaths.graph.store import GraphStore
from wikipaths.graph.waypoint import WaypointComposer

__all__ = [
    "GraphStore",
    "Path",
    "ShortestPathSearch",
    "WaypointComposer",
]
