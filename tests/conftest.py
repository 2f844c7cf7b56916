"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from pathlib import Path

import pytest

from wikipaths.data import build_graph
from wikipaths.finder import PathFinder
from wikipaths.graph import GraphStore


@pytest.fixture
def diamond_store() -> GraphStore:
    """A -> B -> C -> D with a shortcut A -> D."""
    return build_graph(
        ["A", "B", "C", "D"],
        [("A", "B"), ("B", "C"), ("C", "D"), ("A", "D")],
    )


@pytest.fixture
def diamond_finder(diamond_store: GraphStore) -> PathFinder:
    return PathFinder(diamond_store)


@pytest.fixture
def chain_finder() -> PathFinder:
    """A -> B -> C, no A -> C."""
    return PathFinder(build_graph(["A", "B", "C"], [("A", "B"), ("B", "C")]))


@pytest.fixture
def disconnected_finder() -> PathFinder:
    """Two vertices, no edges."""
    return PathFinder(build_graph(["X", "Y"], []))


@pytest.fixture
def vertex_file(tmp_path: Path) -> Path:
    """A small vertex file with comments, blanks and URL-encoded names."""
    path = tmp_path / "articles.tsv"
    path.write_text(
        "# The articles\n"
        "Albert_Einstein\n"
        "\n"
        "Physics\n"
        "Pizza\n"
        "%C3%85land\n"
        "Isolated\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def edge_file(tmp_path: Path) -> Path:
    """Edges over vertex_file's articles."""
    path = tmp_path / "links.tsv"
    path.write_text(
        "# from\tto\n"
        "Albert_Einstein\tPhysics\n"
        "Physics\tPizza\n"
        "Pizza\t%C3%85land\n"
        "\n"
        "%C3%85land\tAlbert_Einstein\n",
        encoding="utf-8",
    )
    return path
