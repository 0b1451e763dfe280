"""Plain-text adjacency format for labelled graphs.

Format::

    n l
    <label of 0> <neighbour> <neighbour> ...
    <label of 1> <neighbour> ...
    ...

Exactly n vertex lines follow the header, in increasing vertex order. Edges
are inserted symmetrically, so an edge listed on only one endpoint's line is
still undirected. Anything after the n-th vertex line is ignored.
"""

import logging
from pathlib import Path

from graphanon.graph.errors import InvalidInputError
from graphanon.graph.labelled import LabelledGraph

log = logging.getLogger(__name__)


def _parse_int(token: str, line: int, field: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidInputError(
            f"Expected an integer, got {token!r}", line=line, field=field
        ) from None


def parse_graph(text: str) -> LabelledGraph:
    """Parse a labelled graph from the plain-text adjacency format.

    Args:
        text: Full file contents.

    Returns:
        The parsed LabelledGraph.

    Raises:
        InvalidInputError: On a malformed header, a non-positive vertex
            count, missing vertex lines, or out-of-range labels/neighbours.
        ConfigurationError: If the label count is outside [1, 32].
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise InvalidInputError("Missing 'n l' header", line=1, field="header")

    header = lines[0].split()
    if len(header) != 2:
        raise InvalidInputError(
            f"Header must contain exactly two integers, got {len(header)} tokens",
            line=1,
            field="header",
        )
    n = _parse_int(header[0], 1, "n")
    num_labels = _parse_int(header[1], 1, "l")
    if n <= 0:
        raise InvalidInputError(
            f"Did not parse a positive number of vertices (n={n})",
            line=1,
            field="n",
        )

    graph = LabelledGraph(n, num_labels)

    for u in range(n):
        lineno = u + 2
        if lineno > len(lines):
            raise InvalidInputError(
                f"Expected {n} vertex lines, found {len(lines) - 1}",
                line=lineno,
            )
        tokens = lines[u + 1].split()
        if not tokens:
            raise InvalidInputError(
                f"Missing label for vertex {u}", line=lineno, field="label"
            )

        label = _parse_int(tokens[0], lineno, "label")
        if not 0 <= label < num_labels:
            raise InvalidInputError(
                f"Label {label} of vertex {u} outside [0, {num_labels})",
                line=lineno,
                field="label",
            )
        graph.set_label(u, label)

        for token in tokens[1:]:
            v = _parse_int(token, lineno, "neighbour")
            if not 0 <= v < n:
                raise InvalidInputError(
                    f"Neighbour {v} of vertex {u} outside [0, {n})",
                    line=lineno,
                    field="neighbour",
                )
            graph.add_edge(u, v)

    log.info(
        "Parsed graph: n=%d, l=%d, edges=%d",
        n,
        num_labels,
        graph.edge_count(),
    )
    return graph


def format_graph(graph: LabelledGraph) -> str:
    """Render a graph in the plain-text adjacency format (neighbours sorted)."""
    out = [f"{graph.vertex_count()} {graph.label_count()}"]
    for v in range(graph.vertex_count()):
        fields = [str(graph.label_of(v))]
        fields.extend(str(u) for u in sorted(graph.neighbors_of(v)))
        out.append(" ".join(fields))
    return "\n".join(out) + "\n"


def read_graph(path: str | Path) -> LabelledGraph:
    """Read a labelled graph from a file."""
    path = Path(path)
    log.info("Reading graph from %s", path)
    return parse_graph(path.read_text())


def write_graph(graph: LabelledGraph, path: str | Path) -> Path:
    """Write a labelled graph to a file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_graph(graph))
    log.info("Graph written to %s (edges=%d)", path, graph.edge_count())
    return path
