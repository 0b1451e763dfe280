"""Labelled graph substrate, label assignment, and plain-text graph I/O."""

from graphanon.graph.errors import (
    ConfigurationError,
    DimensionMismatchError,
    GraphAnonError,
    InvalidInputError,
)
from graphanon.graph.generate import generate_random_graph
from graphanon.graph.io import format_graph, parse_graph, read_graph, write_graph
from graphanon.graph.labelled import MAX_LABELS, LabelledGraph
from graphanon.graph.labels import (
    LABEL_ASSIGNMENT_METHODS,
    assign_labels,
    evenly_distribute_labels,
    randomly_assign_labels,
)
from graphanon.graph.substrate import UndirectedGraph

__all__ = [
    "ConfigurationError",
    "DimensionMismatchError",
    "GraphAnonError",
    "InvalidInputError",
    "LABEL_ASSIGNMENT_METHODS",
    "LabelledGraph",
    "MAX_LABELS",
    "UndirectedGraph",
    "assign_labels",
    "evenly_distribute_labels",
    "format_graph",
    "generate_random_graph",
    "parse_graph",
    "randomly_assign_labels",
    "read_graph",
    "write_graph",
]
