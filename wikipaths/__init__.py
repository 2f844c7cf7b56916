"""
Wikipedia link-graph path finder.

Loads an article/link graph from vertex and edge lists and answers
shortest-path queries between articles, optionally forced through an
intermediate article.
"""

from wikipaths.finder import PathFinder
from wikipaths.graph import GraphStore, Path

__version__ = "0.1.0"

__all__ = ["GraphStore", "Path", "PathFinder"]
