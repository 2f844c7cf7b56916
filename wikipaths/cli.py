"""
wikipaths CLI - find the shortest path between two articles.

Usage:
    wikipaths articles.tsv links.tsv
    wikipaths articles.tsv links.tsv useIntermediateNode
    wikipaths articles.tsv links.tsv --start Albert_Einstein --end Pizza
    wikipaths articles.tsv links.tsv --start Cat --via Physics --end Dog
    wikipaths --snapshot data/link_graph.msgpack --stats

Without VERTICES EDGES, the files under the configured data directory are
used. Without --start/--end, articles are picked at random. Passing
useIntermediateNode (or --via) forces the path through a third article.
Article names are URL-decoded for display only.
"""

from __future__ import annotations

import argparse
import logging
import random
import re
import sys
from urllib.parse import unquote_plus

from wikipaths.config import (
    DECODE_ERROR_PLACEHOLDER,
    EDGES_PATH,
    INTERMEDIATE_FLAG,
    LOG_LEVEL,
    PATH_SEPARATOR,
    VERTICES_PATH,
)
from wikipaths.errors import UnknownVertexError, WikiPathsError
from wikipaths.finder import PathFinder
from wikipaths.graph import Path

logger = logging.getLogger(__name__)

# A '%' not followed by two hex digits
BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_name(name: str) -> str:
    """
    URL-decode a vertex name for display, or return a placeholder.

    Malformed escapes ('%ZZ', a trailing '%') and escapes that do not form
    valid UTF-8 both yield the placeholder.
    """
    if BAD_ESCAPE_RE.search(name):
        logger.warning(f"Problem decoding {name!r}: malformed escape")
        return DECODE_ERROR_PLACEHOLDER
    try:
        return unquote_plus(name, errors="strict")
    except UnicodeDecodeError:
        logger.warning(f"Problem decoding {name!r}")
        return DECODE_ERROR_PLACEHOLDER


def format_result(start: str, end: str, path: Path | None, via: str | None = None) -> str:
    """Render a query result in the '#'-prefixed report format."""
    if via is None:
        message = f"Path from {decode_name(start)} to {decode_name(end)}"
    else:
        message = (
            f"Path from {decode_name(start)} through {decode_name(via)} "
            f"to {decode_name(end)}"
        )

    if path is None:
        body = "No path found :("
    else:
        arrows = PATH_SEPARATOR.join(decode_name(name) for name in path)
        body = f"Length = {path.length}\n#\t{arrows}"

    return f"\n#\t{message}:\n#\t{body}\n"


def non_negative_int(value: str) -> int:
    """argparse type for hop limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="wikipaths",
        description="Find shortest paths in an article link graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "sources",
        nargs="*",
        metavar="VERTICES EDGES [useIntermediateNode]",
        help="Vertex file, edge file, and optionally useIntermediateNode",
    )
    parser.add_argument(
        "--snapshot",
        type=str,
        default=None,
        help="Load the graph from a msgpack snapshot instead of text files",
    )
    parser.add_argument("--start", type=str, default=None, help="Start article (default: random)")
    parser.add_argument("--end", type=str, default=None, help="End article (default: random)")
    parser.add_argument(
        "--via",
        type=str,
        default=None,
        help="Article the path must pass through (implies useIntermediateNode)",
    )
    parser.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=None,
        help="Give up on paths longer than this many links (default: no limit)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for article selection",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print graph statistics and validation checks, then exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Sources are 'VERTICES EDGES [flag]' for text files, or '[flag]' with --snapshot
    sources = list(args.sources)
    args.use_intermediate = bool(sources) and sources[-1] == INTERMEDIATE_FLAG
    if args.use_intermediate:
        sources.pop()

    # No files at all falls back to the configured data directory
    if not sources and not args.snapshot:
        sources = [str(VERTICES_PATH), str(EDGES_PATH)]

    expected = 0 if args.snapshot else 2
    if len(sources) != expected:
        parser.error("Please check your arguments")

    args.vertices, args.edges = (sources + [None, None])[:2]
    args.use_intermediate = args.use_intermediate or args.via is not None
    return args


def load_finder(args: argparse.Namespace) -> PathFinder:
    if args.snapshot:
        return PathFinder.from_snapshot(args.snapshot, max_depth=args.max_depth)
    return PathFinder.from_files(args.vertices, args.edges, max_depth=args.max_depth)


def print_stats(finder: PathFinder) -> None:
    print("\n=== Graph Statistics ===\n")
    for key, value in finder.store.stats().items():
        if isinstance(value, bool):
            print(f"  {key}: {value}")
        else:
            print(f"  {key}: {value:,}")

    print("\n=== Validation Checks ===\n")
    for check, passed in finder.store.validate().items():
        status = "✓" if passed else "✗"
        print(f"  {status} {check}")

    report = finder.load_report
    if report is not None and report.skipped:
        print(f"\n  Skipped lines: {len(report.skipped):,}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        finder = load_finder(args)
    except WikiPathsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.stats:
        print_stats(finder)
        return 0

    # Three random picks in start, waypoint, end order; explicit names win
    rng = random.Random(args.seed)
    random_start, random_via, random_end = finder.random_vertices(3, rng)
    start = args.start or random_start
    end = args.end or random_end
    via = (args.via or random_via) if args.use_intermediate else None

    try:
        if via is None:
            path = finder.path(start, end)
        else:
            path = finder.path_through(start, via, end)
    except UnknownVertexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_result(start, end, path, via=via))
    return 0


if __name__ == "__main__":
    sys.exit(main())
