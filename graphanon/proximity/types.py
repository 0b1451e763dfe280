"""Result records for proximity strategy runs."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AnonymizationResult:
    """Outcome of one hopeful or greedy run on a graph.

    Non-convergence is a normal outcome: the graph may become complete, or
    the edge/iteration ceiling may stop the run, before every vertex is
    within alpha of the global distribution.
    """

    strategy: str
    alpha: float
    converged: bool
    edges_added: int
    iterations: int
    initial_max_distance: float
    final_max_distance: float
    complete: bool  # graph ended as a complete graph
    hit_ceiling: bool  # stopped by max_edges / max_iterations
    trace: tuple[float, ...] = ()  # max distance before the run and after each iteration

    @property
    def status(self) -> str:
        return "converged" if self.converged else "did not converge"
