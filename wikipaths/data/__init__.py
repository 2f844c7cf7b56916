"""
Data loading module.

Builds GraphStore instances from vertex/edge list files or msgpack
snapshots.

Usage:
    from wikipaths.data import load_graph

    store, report = load_graph("articles.tsv", "links.tsv")
"""

from wikipaths.data.loader import (
    LoadReport,
    SkippedLine,
    build_graph,
    dump_snapshot,
    load_graph,
    load_snapshot,
)

__all__ = [
    "LoadReport",
    "SkippedLine",
    "build_graph",
    "dump_snapshot",
    "load_graph",
    "load_snapshot",
]
