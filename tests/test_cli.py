"""
Tests for the wikipaths command-line driver.
"""

import msgpack
import pytest

from wikipaths.cli import decode_name, format_result, main, parse_args
from wikipaths.config import EDGES_PATH, VERTICES_PATH, get_missing_data_files, validate_data_files
from wikipaths.data import dump_snapshot, load_graph
from wikipaths.graph import Path


class TestDisplay:
    """Test name decoding and result formatting."""

    def test_decode_percent_and_plus(self):
        assert decode_name("%C3%85land") == "Åland"
        assert decode_name("New+York") == "New York"

    def test_decode_plain_name(self):
        assert decode_name("Albert_Einstein") == "Albert_Einstein"

    def test_decode_invalid_utf8(self):
        assert decode_name("Bad%FF") == "(error)"

    @pytest.mark.parametrize("name", ["%ZZ", "100%", "Rock_%2"])
    def test_decode_malformed_escape(self, name):
        assert decode_name(name) == "(error)"

    def test_format_found(self):
        text = format_result("A", "C", Path(("A", "B", "C")))
        assert text == "\n#\tPath from A to C:\n#\tLength = 2\n#\tA --> B --> C\n"

    def test_format_with_waypoint(self):
        text = format_result("A", "C", Path(("A", "B", "C")), via="B")
        assert text.startswith("\n#\tPath from A through B to C:\n")

    def test_format_not_found(self):
        assert format_result("X", "Y", None) == "\n#\tPath from X to Y:\n#\tNo path found :(\n"


class TestArguments:
    """Test argument validation."""

    def test_two_files(self):
        args = parse_args(["v.tsv", "e.tsv"])
        assert (args.vertices, args.edges) == ("v.tsv", "e.tsv")
        assert args.use_intermediate is False

    def test_intermediate_flag(self):
        args = parse_args(["v.tsv", "e.tsv", "useIntermediateNode"])
        assert args.use_intermediate is True

    def test_via_implies_intermediate(self):
        assert parse_args(["v.tsv", "e.tsv", "--via", "B"]).use_intermediate is True

    @pytest.mark.parametrize("value", ["-1", "two"])
    def test_bad_max_depth(self, value, capsys):
        """Invalid hop limits are argument errors, not tracebacks."""
        with pytest.raises(SystemExit) as excinfo:
            parse_args(["v.tsv", "e.tsv", "--max-depth", value])
        assert excinfo.value.code == 2
        assert "--max-depth" in capsys.readouterr().err

    def test_zero_max_depth(self):
        assert parse_args(["v.tsv", "e.tsv", "--max-depth", "0"]).max_depth == 0

    def test_default_data_files(self):
        """No positional files falls back to the configured paths."""
        args = parse_args(["useIntermediateNode"])
        assert args.vertices == str(VERTICES_PATH)
        assert args.edges == str(EDGES_PATH)
        assert args.use_intermediate is True

    def test_snapshot_without_files(self):
        args = parse_args(["--snapshot", "g.msgpack", "useIntermediateNode"])
        assert args.vertices is None
        assert args.use_intermediate is True

    @pytest.mark.parametrize(
        "argv",
        [["v.tsv"], ["v.tsv", "e.tsv", "somethingElse"], ["--snapshot", "g.msgpack", "v.tsv"]],
    )
    def test_bad_arguments(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            parse_args(argv)
        assert excinfo.value.code == 2


class TestMain:
    """End-to-end runs against small files."""

    def test_explicit_path(self, vertex_file, edge_file, capsys):
        code = main([str(vertex_file), str(edge_file), "--start", "Pizza", "--end", "Physics"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Path from Pizza to Physics:" in out
        assert "Length = 3" in out
        assert "Pizza --> Åland --> Albert_Einstein --> Physics" in out

    def test_explicit_waypoint(self, vertex_file, edge_file, capsys):
        code = main([
            str(vertex_file), str(edge_file),
            "--start", "Physics", "--via", "Albert_Einstein", "--end", "Pizza",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "through Albert_Einstein" in out
        assert "Length = 5" in out

    def test_no_path(self, vertex_file, edge_file, capsys):
        code = main([str(vertex_file), str(edge_file), "--start", "Pizza", "--end", "Isolated"])
        assert code == 0
        assert "No path found :(" in capsys.readouterr().out

    def test_unknown_article(self, vertex_file, edge_file, capsys):
        code = main([str(vertex_file), str(edge_file), "--start", "Chemistry", "--end", "Pizza"])
        assert code == 1
        assert "Unknown vertex" in capsys.readouterr().err

    def test_random_articles(self, vertex_file, edge_file, capsys):
        code = main([str(vertex_file), str(edge_file), "useIntermediateNode", "--seed", "3"])
        out = capsys.readouterr().out
        assert code == 0
        assert "through" in out

    def test_missing_vertex_file(self, tmp_path, edge_file, capsys):
        code = main([str(tmp_path / "missing.tsv"), str(edge_file)])
        assert code == 1
        assert "No vertices" in capsys.readouterr().err

    def test_malformed_snapshot(self, tmp_path, capsys):
        snapshot = tmp_path / "graph.msgpack"
        snapshot.write_bytes(msgpack.packb({"titles": ["A", "A"]}))
        code = main(["--snapshot", str(snapshot)])
        assert code == 1
        assert "already registered" in capsys.readouterr().err

    def test_snapshot_stats(self, tmp_path, vertex_file, edge_file, capsys):
        store, _ = load_graph(vertex_file, edge_file)
        snapshot = tmp_path / "graph.msgpack"
        dump_snapshot(store, snapshot)

        code = main(["--snapshot", str(snapshot), "--stats"])
        out = capsys.readouterr().out
        assert code == 0
        assert "total_vertices: 5" in out
        assert "✓ names_bijective" in out


class TestConfig:
    def test_data_file_report(self):
        """Every default source is reported, missing or not."""
        status = validate_data_files()
        assert set(status) == {"vertices", "edges", "snapshot"}
        missing = get_missing_data_files()
        assert all(not status[name] for name in missing)
