"""Tests for the plain-text adjacency format."""

from pathlib import Path

import pytest

from graphanon.graph.errors import ConfigurationError, InvalidInputError
from graphanon.graph.io import format_graph, parse_graph, read_graph, write_graph
from graphanon.graph.labelled import LabelledGraph

SQUARE = """4 2
0 1 3
1 0 2
0 1 3
1 2 0
"""


class TestParseGraph:

    def test_parses_labels_and_edges(self) -> None:
        g = parse_graph(SQUARE)
        assert g.vertex_count() == 4
        assert g.label_count() == 2
        assert g.labels().tolist() == [0, 1, 0, 1]
        assert g.edge_count() == 4
        assert sorted(g.neighbors_of(0)) == [1, 3]

    def test_one_sided_edges_are_symmetric(self) -> None:
        g = parse_graph("3 1\n0 1 2\n0\n0\n")
        assert g.has_edge(1, 0)
        assert g.has_edge(2, 0)
        assert g.edge_count() == 2

    def test_self_loops_and_duplicates_ignored(self) -> None:
        g = parse_graph("2 1\n0 0 1 1\n0 0\n")
        assert g.edge_count() == 1

    def test_trailing_lines_ignored(self) -> None:
        g = parse_graph("1 1\n0\n\n\ngarbage here\n")
        assert g.vertex_count() == 1

    def test_unsorted_neighbours(self) -> None:
        g = parse_graph("4 2\n0 3 1 2\n1\n0\n1\n")
        assert sorted(g.neighbors_of(0)) == [1, 2, 3]


class TestParseErrors:
    """Malformed input raises InvalidInputError with its location."""

    def test_empty_input(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("")
        assert exc.value.line == 1

    def test_non_positive_vertex_count(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("0 2\n")
        assert exc.value.line == 1
        assert exc.value.field == "n"

    def test_negative_vertex_count(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("-3 2\n")
        assert exc.value.field == "n"

    def test_non_integer_header(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("four 2\n")
        assert exc.value.field == "n"

    def test_header_wrong_arity(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("4\n")
        assert exc.value.field == "header"

    def test_too_many_labels(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_graph("1 33\n0\n")

    def test_missing_vertex_lines(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("3 2\n0 1\n1 0\n")
        assert exc.value.line == 4

    def test_blank_vertex_line(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("2 2\n0 1\n\n")
        assert exc.value.line == 3
        assert exc.value.field == "label"

    def test_label_out_of_range(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("2 2\n0\n2\n")
        assert exc.value.line == 3
        assert exc.value.field == "label"

    def test_neighbour_out_of_range(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("2 2\n0 5\n1\n")
        assert exc.value.line == 2
        assert exc.value.field == "neighbour"

    def test_non_integer_neighbour(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            parse_graph("2 2\n0 x\n1\n")
        assert exc.value.field == "neighbour"

    def test_message_includes_location(self) -> None:
        with pytest.raises(InvalidInputError, match="line 3"):
            parse_graph("2 2\n0\n9\n")


class TestFormatGraph:

    def test_format_sorted_neighbours(self) -> None:
        g = LabelledGraph(3, 2)
        g.set_label(2, 1)
        g.add_edge(0, 2)
        g.add_edge(0, 1)
        assert format_graph(g) == "3 2\n0 1 2\n0 0\n1 0\n"

    def test_parse_format_preserves_graph(self) -> None:
        g = parse_graph(SQUARE)
        again = parse_graph(format_graph(g))
        assert again.labels().tolist() == g.labels().tolist()
        assert list(again.edges()) == list(g.edges())


class TestFileIO:

    def test_write_then_read(self, tmp_path: Path) -> None:
        g = parse_graph(SQUARE)
        path = write_graph(g, tmp_path / "out" / "graph.txt")
        assert path.exists()
        loaded = read_graph(path)
        assert list(loaded.edges()) == list(g.edges())

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_graph(tmp_path / "nope.txt")
