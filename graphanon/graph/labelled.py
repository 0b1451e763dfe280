"""Undirected graph whose vertices each carry one label from 0..l-1."""

import numpy as np

from graphanon.graph.errors import ConfigurationError
from graphanon.graph.substrate import UndirectedGraph

# Deficiency sets are 32-bit masks over label ids.
MAX_LABELS = 32


class LabelledGraph(UndirectedGraph):
    """Undirected graph with exactly one label per vertex.

    Every vertex starts with label 0, which doubles as the "unlabelled"
    sentinel during even label distribution.
    """

    def __init__(self, num_vertices: int, num_labels: int) -> None:
        if not 1 <= num_labels <= MAX_LABELS:
            raise ConfigurationError(
                f"num_labels must be in [1, {MAX_LABELS}], got {num_labels}"
            )
        super().__init__(num_vertices)
        self._l = num_labels
        self._labels = np.zeros(num_vertices, dtype=np.int64)

    def label_count(self) -> int:
        return self._l

    def label_of(self, v: int) -> int:
        self._check_vertex(v)
        return int(self._labels[v])

    def set_label(self, v: int, label: int) -> None:
        self._check_vertex(v)
        if not 0 <= label < self._l:
            raise ValueError(f"label {label} out of range [0, {self._l})")
        self._labels[v] = label

    def labels(self) -> np.ndarray:
        """Copy of the per-vertex label array."""
        return self._labels.copy()

    def label_counts(self) -> np.ndarray:
        return np.bincount(self._labels, minlength=self._l)

    def __repr__(self) -> str:
        return (
            f"LabelledGraph(n={self.vertex_count()}, l={self._l}, "
            f"m={self.edge_count()})"
        )
