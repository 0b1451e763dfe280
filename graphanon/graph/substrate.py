"""Unlabelled undirected graph with insert-only adjacency sets.

Adjacency is stored as one Python set per vertex, so membership tests and
insertions are amortized O(1). Edges are only ever added; there is no
removal operation.
"""

import logging
from collections.abc import Iterator

import numpy as np

log = logging.getLogger(__name__)

# Rejection-sampling attempts before add_random_edge enumerates the
# complement explicitly (only worthwhile once the graph is dense).
RANDOM_EDGE_ATTEMPTS = 64


class UndirectedGraph:
    """Simple undirected graph on vertices 0..n-1 (no self-loops, no multi-edges)."""

    def __init__(self, num_vertices: int) -> None:
        if num_vertices < 1:
            raise ValueError(
                f"num_vertices must be positive, got {num_vertices}"
            )
        self._n = num_vertices
        self._adjacency: list[set[int]] = [set() for _ in range(num_vertices)]
        self._m = 0

    def vertex_count(self) -> int:
        return self._n

    def edge_count(self) -> int:
        return self._m

    def max_edge_count(self) -> int:
        """Number of edges in the complete graph on the same vertex set."""
        return self._n * (self._n - 1) // 2

    def _check_vertex(self, v: int) -> None:
        if not 0 <= v < self._n:
            raise ValueError(f"vertex {v} out of range [0, {self._n})")

    def neighbors_of(self, v: int) -> frozenset[int]:
        """Read-only snapshot of the neighbours of v."""
        self._check_vertex(v)
        return frozenset(self._adjacency[v])

    def degree(self, v: int) -> int:
        self._check_vertex(v)
        return len(self._adjacency[v])

    def has_edge(self, u: int, v: int) -> bool:
        self._check_vertex(u)
        self._check_vertex(v)
        return v in self._adjacency[u]

    def add_edge(self, u: int, v: int) -> bool:
        """Insert the undirected edge (u, v).

        Returns:
            True if the edge was inserted, False if u == v or the edge
            already exists.
        """
        self._check_vertex(u)
        self._check_vertex(v)
        if u == v or v in self._adjacency[u]:
            return False
        self._adjacency[u].add(v)
        self._adjacency[v].add(u)
        self._m += 1
        return True

    def is_complete(self) -> bool:
        return self._m == self.max_edge_count()

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield every edge once as (u, v) with u < v."""
        for u, nbrs in enumerate(self._adjacency):
            for v in sorted(nbrs):
                if u < v:
                    yield u, v

    def add_random_edge(self, rng: np.random.Generator) -> tuple[int, int] | None:
        """Insert an edge chosen uniformly among the currently non-adjacent pairs.

        Samples unordered vertex pairs and rejects adjacent ones, which is
        uniform over the non-adjacent pairs. When the graph is too dense for
        rejection sampling to succeed quickly, the complement is enumerated
        and one pair is drawn from it directly.

        Args:
            rng: numpy random Generator supplying all randomness.

        Returns:
            The inserted (u, v) pair with u < v, or None if the graph is
            already complete.
        """
        if self.is_complete():
            return None

        for _ in range(RANDOM_EDGE_ATTEMPTS):
            u, v = rng.choice(self._n, size=2, replace=False)
            u, v = int(min(u, v)), int(max(u, v))
            if self.add_edge(u, v):
                return u, v

        missing = [
            (u, v)
            for u in range(self._n)
            for v in range(u + 1, self._n)
            if v not in self._adjacency[u]
        ]
        log.debug(
            "Rejection sampling exhausted; drawing from %d non-adjacent pairs",
            len(missing),
        )
        u, v = missing[int(rng.integers(len(missing)))]
        self.add_edge(u, v)
        return u, v
