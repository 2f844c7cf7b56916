"""
Build a GraphStore from vertex/edge list files or a msgpack snapshot.

Usage:
    from wikipaths.data.loader import load_graph

    store, report = load_graph("data/articles.tsv", "data/links.tsv")
    print(f"Skipped {len(report.skipped)} lines")

Vertex files hold one name per line; edge files hold two names separated by
a tab. Blank lines and lines starting with '#' are ignored in both. Bad lines
are logged and skipped so a single malformed entry never aborts a load.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import msgpack

from wikipaths.config import COMMENT_PREFIX, EDGE_SEPARATOR
from wikipaths.errors import (
    DuplicateVertexError,
    GraphLoadError,
    MalformedInputLineError,
    UnknownVertexError,
)
from wikipaths.graph.store import GraphStore

logger = logging.getLogger(__name__)


@dataclass
class SkippedLine:
    """
    A source line that was not loaded.

    Attributes:
        source: File the line came from
        line_number: 1-indexed line number
        reason: Why the line was skipped
    """

    source: str
    line_number: int
    reason: str


@dataclass
class LoadReport:
    """
    Summary of a graph load.

    Attributes:
        vertices_loaded: Number of vertices registered
        edges_loaded: Number of edges recorded
        skipped: Every line that was skipped, in read order
        read_errors: I/O failures that cut a source short
    """

    vertices_loaded: int = 0
    edges_loaded: int = 0
    skipped: list[SkippedLine] = field(default_factory=list)
    read_errors: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """Whether every line of every source was loaded."""
        return not self.skipped and not self.read_errors


# =============================================================================
# Line Parsing
# =============================================================================

def is_ignored(line: str | bytes) -> bool:
    """Blank lines and comments carry no data."""
    prefix = COMMENT_PREFIX if isinstance(line, str) else COMMENT_PREFIX.encode()
    return not line or line.startswith(prefix)


def decode_line(raw: bytes, source: str = "<input>", line_number: int = 0) -> str:
    """
    Decode one raw source line as UTF-8.

    Raises:
        MalformedInputLineError: If the line is not valid UTF-8
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputLineError(
            source, line_number, f"invalid UTF-8 at byte {e.start}"
        ) from e


def parse_vertex_line(line: str, source: str = "<vertices>", line_number: int = 0) -> str:
    """
    Return the vertex name held by a data line.

    Raises:
        MalformedInputLineError: If the line contains the edge separator
    """
    if EDGE_SEPARATOR in line:
        raise MalformedInputLineError(source, line_number, "vertex name contains a tab")
    return line


def parse_edge_line(
    line: str, source: str = "<edges>", line_number: int = 0
) -> tuple[str, str]:
    """
    Split a data line into (from_name, to_name).

    Raises:
        MalformedInputLineError: If the line does not hold exactly two
            non-empty tab-separated names
    """
    fields = line.split(EDGE_SEPARATOR)
    if len(fields) != 2:
        raise MalformedInputLineError(
            source, line_number, f"expected 2 tab-separated fields, got {len(fields)}"
        )
    from_name, to_name = fields
    if not from_name or not to_name:
        raise MalformedInputLineError(source, line_number, "empty vertex name")
    return from_name, to_name


def _iter_data_lines(
    path: Path, report: LoadReport
) -> Iterator[tuple[int, bytes]]:
    """
    Yield (line_number, raw_line) for every non-ignored line of a file.

    Lines are yielded undecoded so that one bad byte only spoils its own
    line. An I/O failure ends the iteration early; lines already yielded
    stay loaded and the failure is recorded on the report.
    """
    try:
        with open(path, "rb") as f:
            for line_number, raw in enumerate(f, start=1):
                raw = raw.rstrip(b"\r\n")
                if not is_ignored(raw):
                    yield line_number, raw
    except OSError as e:
        logger.error(f"Problem reading {path}: {e}")
        report.read_errors.append(f"{path}: {e}")


def _skip(report: LoadReport, error: MalformedInputLineError) -> None:
    logger.warning(f"Skipping line {error.source}:{error.line_number}: {error.reason}")
    report.skipped.append(SkippedLine(error.source, error.line_number, error.reason))


# =============================================================================
# Text Sources
# =============================================================================

def load_vertices(
    store: GraphStore, path: str | Path, report: LoadReport, strict: bool = False
) -> None:
    """Register every vertex named in a vertex file."""
    path = Path(path)
    logger.info(f"Loading vertices from {path}...")

    for line_number, raw in _iter_data_lines(path, report):
        try:
            line = decode_line(raw, str(path), line_number)
            store.register_vertex(parse_vertex_line(line, str(path), line_number))
        except MalformedInputLineError as e:
            if strict:
                raise
            _skip(report, e)
        except DuplicateVertexError as e:
            if strict:
                raise
            _skip(report, MalformedInputLineError(str(path), line_number, str(e)))
        else:
            report.vertices_loaded += 1

    logger.info(f"Loaded {report.vertices_loaded:,} vertices")


def load_edges(
    store: GraphStore, path: str | Path, report: LoadReport, strict: bool = False
) -> None:
    """Record every edge listed in an edge file."""
    path = Path(path)
    logger.info(f"Loading edges from {path}...")

    for line_number, raw in _iter_data_lines(path, report):
        try:
            line = decode_line(raw, str(path), line_number)
            store.add_edge(*parse_edge_line(line, str(path), line_number))
        except MalformedInputLineError as e:
            if strict:
                raise
            _skip(report, e)
        except UnknownVertexError as e:
            if strict:
                raise
            _skip(report, MalformedInputLineError(str(path), line_number, str(e)))
        else:
            report.edges_loaded += 1

    logger.info(f"Loaded {report.edges_loaded:,} edges")


def load_graph(
    vertex_path: str | Path,
    edge_path: str | Path,
    strict: bool = False,
) -> tuple[GraphStore, LoadReport]:
    """
    Build a frozen GraphStore from a vertex file and an edge file.

    Args:
        vertex_path: File with one vertex name per line
        edge_path: File with one tab-separated edge per line
        strict: Raise on the first bad line instead of skipping it

    Returns:
        (store, report) tuple

    Raises:
        GraphLoadError: If no vertices could be loaded
    """
    store = GraphStore()
    report = LoadReport()

    load_vertices(store, vertex_path, report, strict=strict)
    if store.vertex_count() == 0:
        raise GraphLoadError(f"No vertices could be loaded from {vertex_path}")

    load_edges(store, edge_path, report, strict=strict)
    store.freeze()

    if report.skipped:
        logger.warning(f"Skipped {len(report.skipped):,} malformed or unresolved lines")
    return store, report


def build_graph(vertices: Iterable[str], edges: Iterable[tuple[str, str]]) -> GraphStore:
    """
    Build a frozen GraphStore from in-memory names and (from, to) pairs.

    Unlike the file loaders this does not skip anything: duplicate names and
    unknown edge endpoints raise.
    """
    store = GraphStore()
    for name in vertices:
        store.register_vertex(name)
    for from_name, to_name in edges:
        store.add_edge(from_name, to_name)
    store.freeze()
    return store


# =============================================================================
# Snapshot Source
# =============================================================================

def load_snapshot(path: str | Path) -> GraphStore:
    """
    Build a frozen GraphStore from a msgpack link-graph snapshot.

    The snapshot is a map with "titles" (names in id order) and "links"
    (source id -> list of target ids). Links that are not integer ids
    within the title list are logged and skipped.

    Raises:
        GraphLoadError: If the file cannot be read, holds no titles, has
            duplicate or non-string titles, or links is not a map
    """
    path = Path(path)
    logger.info(f"Loading graph snapshot from {path}...")
    try:
        with open(path, "rb") as f:
            data = msgpack.load(f, strict_map_key=False)
    except (OSError, ValueError, msgpack.UnpackException) as e:
        raise GraphLoadError(f"Problem reading snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise GraphLoadError(f"Snapshot {path} is not a map")

    titles = data.get("titles")
    if not isinstance(titles, list) or not titles:
        raise GraphLoadError(f"Snapshot {path} contains no titles")

    links = data.get("links", {})
    if not isinstance(links, dict):
        raise GraphLoadError(f"Snapshot {path} links must be a map of id to id list")

    store = GraphStore()
    for title in titles:
        if not isinstance(title, str):
            raise GraphLoadError(f"Snapshot {path} has a non-string title: {title!r}")
        try:
            store.register_vertex(title)
        except DuplicateVertexError as e:
            raise GraphLoadError(f"Snapshot {path}: {e}") from e

    dropped = 0
    for source_idx, targets in links.items():
        if not isinstance(targets, list):
            logger.warning(f"Skipping snapshot links from {source_idx!r}: not a list")
            dropped += 1
            continue
        for target_idx in targets:
            try:
                store.add_edge_by_idx(int(source_idx), int(target_idx))
            except (UnknownVertexError, ValueError, TypeError) as e:
                logger.warning(f"Skipping snapshot link {source_idx} -> {target_idx}: {e}")
                dropped += 1

    store.freeze()
    if dropped:
        logger.warning(f"Dropped {dropped:,} invalid snapshot links")
    return store


def dump_snapshot(store: GraphStore, path: str | Path) -> None:
    """Write a GraphStore as a msgpack link-graph snapshot."""
    path = Path(path)
    links: dict[int, list[int]] = {}
    for idx in range(store.vertex_count()):
        targets = [int(t) for t in store.neighbors_of(idx)]
        if targets:
            links[idx] = targets

    logger.info(f"Writing graph snapshot to {path}...")
    with open(path, "wb") as f:
        msgpack.pack({"titles": store.names(), "links": links}, f)
