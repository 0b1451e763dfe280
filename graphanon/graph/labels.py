"""Label assignment: even (quota-based) and uniform random labelling of vertices.

Even distribution follows the classic quota procedure: every non-zero label
is filled to n // l vertices by rejection sampling over vertices still
carrying the 0 sentinel, and the n mod l remainder is then scattered by a
randomized pass. Both phases are capped so they always terminate; when a cap
is hit the leftovers are assigned deterministically.
"""

import logging

import numpy as np

from graphanon.graph.errors import ConfigurationError
from graphanon.graph.labelled import LabelledGraph

log = logging.getLogger(__name__)

LABEL_ASSIGNMENT_METHODS: tuple[str, ...] = ("even", "random", "input")


def _fill_quota(
    graph: LabelledGraph,
    label: int,
    quota: int,
    rng: np.random.Generator,
    max_attempts: int,
) -> None:
    """Move `quota` sentinel (label 0) vertices to `label`."""
    n = graph.vertex_count()
    assigned = 0
    attempts = 0
    while assigned < quota and attempts < max_attempts:
        attempts += 1
        v = int(rng.integers(n))
        if graph.label_of(v) == 0:
            graph.set_label(v, label)
            assigned += 1

    if assigned < quota:
        log.warning(
            "Label %d: retry cap %d reached with %d/%d assigned; "
            "drawing the rest directly",
            label,
            max_attempts,
            assigned,
            quota,
        )
        unlabelled = np.flatnonzero(graph.labels() == 0)
        chosen = rng.choice(unlabelled, size=quota - assigned, replace=False)
        for v in chosen:
            graph.set_label(int(v), label)


def _scatter_remainder(
    graph: LabelledGraph,
    remainder: int,
    rng: np.random.Generator,
    max_attempts: int,
) -> None:
    """Randomized pass giving up to `remainder` sentinel vertices distinct labels.

    A vertex drawn while still at label 0 receives a label not yet used in
    this pass (possibly 0 itself). Drawing an already-labelled vertex counts
    as a skip with probability 1/l, which keeps the pass from spinning when
    few sentinel vertices are left.
    """
    n = graph.vertex_count()
    num_labels = graph.label_count()
    used: set[int] = set()
    attempts = 0

    while remainder > 0 and attempts < max_attempts:
        attempts += 1
        v = int(rng.integers(n))
        if graph.label_of(v) == 0:
            unused = [lab for lab in range(num_labels) if lab not in used]
            label = unused[int(rng.integers(len(unused)))]
            used.add(label)
            graph.set_label(v, label)
            remainder -= 1
        elif rng.integers(num_labels) == 0:
            remainder -= 1

    if remainder > 0:
        log.warning(
            "Remainder pass hit retry cap %d; assigning %d leftover "
            "vertices round-robin",
            max_attempts,
            remainder,
        )
        unused = [lab for lab in range(num_labels) if lab not in used]
        unlabelled = np.flatnonzero(graph.labels() == 0)
        for v, label in zip(unlabelled[:remainder], unused):
            graph.set_label(int(v), label)


def evenly_distribute_labels(
    graph: LabelledGraph,
    rng: np.random.Generator,
    max_attempts: int | None = None,
) -> np.ndarray:
    """Assign labels so that label counts are as equal as possible.

    Every vertex is reset to label 0 first. Labels 1..l-1 each receive
    exactly n // l vertices; label 0 keeps n // l vertices plus whatever the
    randomized remainder pass leaves at 0.

    Args:
        graph: Graph to relabel in place.
        rng: numpy random Generator supplying all randomness.
        max_attempts: Retry cap per phase. Defaults to 100 * n.

    Returns:
        Label counts after assignment, shape (l,).
    """
    n = graph.vertex_count()
    num_labels = graph.label_count()
    if max_attempts is None:
        max_attempts = 100 * n

    for v in range(n):
        graph.set_label(v, 0)

    per_label = n // num_labels
    for label in range(1, num_labels):
        _fill_quota(graph, label, per_label, rng, max_attempts)

    remainder = n - per_label * num_labels
    if remainder > 0:
        _scatter_remainder(graph, remainder, rng, max_attempts)

    counts = graph.label_counts()
    log.info("Evenly distributed labels: counts=%s", counts.tolist())
    return counts


def randomly_assign_labels(
    graph: LabelledGraph, rng: np.random.Generator
) -> np.ndarray:
    """Give every vertex an independent, uniformly random label."""
    labels = rng.integers(graph.label_count(), size=graph.vertex_count())
    for v, label in enumerate(labels):
        graph.set_label(v, int(label))
    counts = graph.label_counts()
    log.info("Randomly assigned labels: counts=%s", counts.tolist())
    return counts


def assign_labels(
    graph: LabelledGraph, method: str, rng: np.random.Generator
) -> np.ndarray:
    """Apply a named label assignment method.

    Args:
        graph: Graph to label in place.
        method: "even", "random", or "input" (keep the labels already set,
            e.g. read from a graph file).
        rng: numpy random Generator.

    Returns:
        Label counts after assignment.

    Raises:
        ConfigurationError: If method is not recognised.
    """
    if method == "even":
        return evenly_distribute_labels(graph, rng)
    if method == "random":
        return randomly_assign_labels(graph, rng)
    if method == "input":
        return graph.label_counts()
    raise ConfigurationError(
        f"label_assignment must be one of {LABEL_ASSIGNMENT_METHODS}, "
        f"got {method!r}"
    )
