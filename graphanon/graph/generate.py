"""Uniform random labelled graphs used as anonymization input."""

import logging

import numpy as np

from graphanon.graph.labelled import LabelledGraph

log = logging.getLogger(__name__)


def generate_random_graph(
    n: int, num_labels: int, num_edges: int, rng: np.random.Generator
) -> LabelledGraph:
    """Build a graph with `num_edges` uniformly random edges.

    Labels are left at 0; the label assignment stage sets them afterwards.
    A request for more edges than the complete graph holds yields the
    complete graph.

    Args:
        n: Number of vertices.
        num_labels: Size of the label alphabet.
        num_edges: Target number of edges.
        rng: numpy random Generator for reproducibility.

    Returns:
        The generated LabelledGraph.
    """
    if num_edges < 0:
        raise ValueError(f"num_edges must be non-negative, got {num_edges}")

    graph = LabelledGraph(n, num_labels)
    target = min(num_edges, graph.max_edge_count())
    if target < num_edges:
        log.warning(
            "Requested %d edges but K_%d has only %d; generating complete graph",
            num_edges,
            n,
            target,
        )

    while graph.edge_count() < target:
        graph.add_random_edge(rng)

    log.info("Generated random graph: n=%d, l=%d, edges=%d", n, num_labels, target)
    return graph
