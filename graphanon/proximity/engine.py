"""Alpha-proximity test and the edge-insertion strategies that establish it.

A graph is alpha-proximal when every vertex's closed-neighbourhood label
distribution lies within total-variation distance alpha of the global label
distribution. Two strategies add edges until that holds:

- hopeful: one uniformly random edge at a time.
- greedy: rounds of reciprocal matching between deficient vertices, falling
  back to a random edge when a round adds nothing.

Both stop at proximity, at the complete graph, or at an optional
edge/iteration ceiling.
"""

import logging

import numpy as np

from graphanon.config.experiment import STRATEGIES, ProximityConfig
from graphanon.graph.labelled import LabelledGraph
from graphanon.proximity.distribution import LabelDistribution
from graphanon.proximity.labelset import LabelSet
from graphanon.proximity.types import AnonymizationResult

log = logging.getLogger(__name__)


def _check_alpha(alpha: float) -> None:
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")


def global_distribution(graph: LabelledGraph) -> LabelDistribution:
    """Label distribution over every vertex of the graph."""
    return LabelDistribution.from_labels(graph.labels(), graph.label_count())


def neighbourhood_distribution(
    graph: LabelledGraph, v: int, labels: np.ndarray | None = None
) -> LabelDistribution:
    """Label distribution over the closed neighbourhood of v (v and its neighbours).

    Args:
        graph: The labelled graph.
        v: Vertex id.
        labels: Optional pre-fetched label array, to avoid copying it per vertex.
    """
    if labels is None:
        labels = graph.labels()
    members = [v, *graph.neighbors_of(v)]
    return LabelDistribution.from_labels(labels[members], graph.label_count())


def neighbourhood_distances(graph: LabelledGraph) -> np.ndarray:
    """Distance from each vertex's closed neighbourhood to the global distribution."""
    labels = graph.labels()
    global_ld = LabelDistribution.from_labels(labels, graph.label_count())
    return np.array(
        [
            neighbourhood_distribution(graph, v, labels).distance(global_ld)
            for v in range(graph.vertex_count())
        ]
    )


def max_neighbourhood_distance(graph: LabelledGraph) -> float:
    """Worst-case exposure: the largest neighbourhood-to-global distance."""
    return float(neighbourhood_distances(graph).max())


def is_alpha_proximal(graph: LabelledGraph, alpha: float) -> bool:
    """True iff every closed neighbourhood is within alpha of the global distribution."""
    _check_alpha(alpha)
    return max_neighbourhood_distance(graph) <= alpha


def _finish(
    graph: LabelledGraph,
    strategy: str,
    alpha: float,
    edges_added: int,
    iterations: int,
    trace: list[float],
    hit_ceiling: bool,
) -> AnonymizationResult:
    result = AnonymizationResult(
        strategy=strategy,
        alpha=alpha,
        converged=trace[-1] <= alpha,
        edges_added=edges_added,
        iterations=iterations,
        initial_max_distance=trace[0],
        final_max_distance=trace[-1],
        complete=graph.is_complete(),
        hit_ceiling=hit_ceiling,
        trace=tuple(trace),
    )
    if result.converged:
        log.info(
            "%s converged: alpha=%.4f, edges_added=%d, iterations=%d",
            strategy,
            alpha,
            edges_added,
            iterations,
        )
    else:
        log.warning(
            "%s did not converge: alpha=%.4f, max_distance=%.4f, "
            "edges_added=%d, complete=%s, hit_ceiling=%s",
            strategy,
            alpha,
            result.final_max_distance,
            edges_added,
            result.complete,
            hit_ceiling,
        )
    return result


def hopeful(
    graph: LabelledGraph,
    alpha: float,
    rng: np.random.Generator,
    max_edges: int | None = None,
) -> AnonymizationResult:
    """Add uniformly random edges until the graph is alpha-proximal.

    Args:
        graph: Graph to modify in place.
        alpha: Proximity tolerance in [0, 1].
        rng: numpy random Generator choosing the edges.
        max_edges: Optional ceiling on the number of edges added.

    Returns:
        AnonymizationResult describing the run.
    """
    _check_alpha(alpha)
    current = max_neighbourhood_distance(graph)
    trace = [current]
    edges_added = 0
    hit_ceiling = False

    while current > alpha and not graph.is_complete():
        if max_edges is not None and edges_added >= max_edges:
            hit_ceiling = True
            break
        graph.add_random_edge(rng)
        edges_added += 1
        current = max_neighbourhood_distance(graph)
        trace.append(current)

    return _finish(graph, "hopeful", alpha, edges_added, edges_added, trace, hit_ceiling)


def run_greedy_iteration(
    graph: LabelledGraph,
    alpha: float,
    rng: np.random.Generator,
    edge_budget: int | None = None,
) -> int:
    """One round of reciprocal matching between deficient vertices.

    Every vertex with a non-empty deficiency set enters the round's pool.
    The pool is shuffled, then for each vertex v and each label it still
    lacks (lowest first), the later pool entries are searched for a mate u
    that carries that label and is itself deficient in v's label. Connecting
    them helps both; v's label is then dropped from u's record so u is not
    matched for it again this round. Labels without a mate stay deficient.

    An edge is skipped when it would push either endpoint's distance above
    the maximum distance at the start of the round, so a round never raises
    the graph's worst-case distance.

    Only later entries are searched, so a mate that was shuffled ahead of v
    is missed this round.

    Args:
        graph: Graph to modify in place.
        alpha: Proximity tolerance in [0, 1].
        rng: numpy random Generator used to shuffle the pool.
        edge_budget: Stop once this many edges have been added.

    Returns:
        Number of edges added.
    """
    _check_alpha(alpha)
    labels = graph.labels()
    global_ld = LabelDistribution.from_labels(labels, graph.label_count())

    start_max = 0.0
    local: dict[int, LabelDistribution] = {}
    pool: list[tuple[int, LabelSet]] = []
    for v in range(graph.vertex_count()):
        ld = neighbourhood_distribution(graph, v, labels)
        start_max = max(start_max, ld.distance(global_ld))
        defs = ld.deficiencies(global_ld, alpha)
        if not defs.is_empty():
            local[v] = ld
            pool.append((v, defs))

    pool = [pool[i] for i in rng.permutation(len(pool))]

    added = 0
    skipped = 0
    for pos, (v, defs) in enumerate(pool):
        v_label = int(labels[v])
        pending = defs.copy()
        while not pending.is_empty():
            if edge_budget is not None and added >= edge_budget:
                return added
            wanted = pending.lowest_set()
            pending.clear(wanted)
            for j in range(pos + 1, len(pool)):
                u, u_defs = pool[j]
                if v_label not in u_defs or labels[u] != wanted or graph.has_edge(v, u):
                    continue
                v_grown = local[v].grown(wanted)
                u_grown = local[u].grown(v_label)
                if (
                    v_grown.distance(global_ld) > start_max
                    or u_grown.distance(global_ld) > start_max
                ):
                    skipped += 1
                    continue
                graph.add_edge(v, u)
                local[v] = v_grown
                local[u] = u_grown
                u_defs.clear(v_label)
                added += 1
                break

    log.debug(
        "Greedy iteration: pool=%d, edges_added=%d, skipped=%d",
        len(pool),
        added,
        skipped,
    )
    return added


def greedy(
    graph: LabelledGraph,
    alpha: float,
    rng: np.random.Generator,
    max_edges: int | None = None,
    max_iterations: int | None = None,
) -> AnonymizationResult:
    """Run greedy iterations until the graph is alpha-proximal.

    An iteration that adds no edge is followed by a single random edge so
    the loop always makes progress.

    Args:
        graph: Graph to modify in place.
        alpha: Proximity tolerance in [0, 1].
        rng: numpy random Generator.
        max_edges: Optional ceiling on the number of edges added.
        max_iterations: Optional ceiling on the number of iterations.

    Returns:
        AnonymizationResult describing the run.
    """
    _check_alpha(alpha)
    current = max_neighbourhood_distance(graph)
    trace = [current]
    edges_added = 0
    iterations = 0
    hit_ceiling = False

    while current > alpha and not graph.is_complete():
        if max_iterations is not None and iterations >= max_iterations:
            hit_ceiling = True
            break
        budget = None if max_edges is None else max_edges - edges_added
        if budget is not None and budget <= 0:
            hit_ceiling = True
            break

        added = run_greedy_iteration(graph, alpha, rng, edge_budget=budget)
        if added == 0:
            graph.add_random_edge(rng)
            added = 1
            log.debug("Greedy iteration %d added nothing; added a random edge", iterations)

        edges_added += added
        iterations += 1
        current = max_neighbourhood_distance(graph)
        trace.append(current)
        log.debug(
            "Iteration %d: edges_added=%d, max_distance=%.4f",
            iterations,
            added,
            current,
        )

    return _finish(graph, "greedy", alpha, edges_added, iterations, trace, hit_ceiling)


def anonymize(
    graph: LabelledGraph, config: ProximityConfig, rng: np.random.Generator
) -> AnonymizationResult:
    """Run the strategy named in `config` on `graph`."""
    if config.strategy == "hopeful":
        return hopeful(graph, config.alpha, rng, max_edges=config.max_edges)
    if config.strategy == "greedy":
        return greedy(
            graph,
            config.alpha,
            rng,
            max_edges=config.max_edges,
            max_iterations=config.max_iterations,
        )
    raise ValueError(f"strategy must be one of {STRATEGIES}, got {config.strategy!r}")
