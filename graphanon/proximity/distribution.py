"""Empirical label distributions and their comparison.

A LabelDistribution is an immutable vector of per-label counts over some
vertex population: the whole graph for the global distribution, or a
vertex plus its neighbours for a closed-neighbourhood distribution.
Distributions are compared with total-variation distance.
"""

from collections.abc import Mapping, Sequence

import numpy as np

from graphanon.graph.errors import DimensionMismatchError
from graphanon.proximity.labelset import LabelSet


class LabelDistribution:
    """Immutable label-frequency snapshot of a vertex population.

    Args:
        counts: Per-label counts, either a sequence of length l or a mapping
            label -> count (missing labels count as zero).
        num_labels: Required when counts is a mapping; ignored otherwise.

    Raises:
        ValueError: On negative counts, an empty population, or a mapping
            key outside [0, num_labels).
    """

    __slots__ = ("_counts", "_population")

    def __init__(
        self,
        counts: Sequence[int] | Mapping[int, int] | np.ndarray,
        num_labels: int | None = None,
    ) -> None:
        if isinstance(counts, Mapping):
            if num_labels is None:
                raise ValueError("num_labels is required when counts is a mapping")
            arr = np.zeros(num_labels, dtype=np.int64)
            for label, count in counts.items():
                if not 0 <= label < num_labels:
                    raise ValueError(
                        f"label {label} out of range [0, {num_labels})"
                    )
                arr[label] = count
        else:
            arr = np.array(counts, dtype=np.int64)

        if arr.ndim != 1 or arr.size == 0:
            raise ValueError("counts must be a non-empty 1-D sequence")
        if (arr < 0).any():
            raise ValueError(f"counts must be non-negative, got {arr.tolist()}")
        population = int(arr.sum())
        if population == 0:
            raise ValueError("distribution must cover at least one vertex")

        arr.setflags(write=False)
        self._counts = arr
        self._population = population

    @classmethod
    def from_labels(cls, labels: Sequence[int] | np.ndarray, num_labels: int) -> "LabelDistribution":
        """Count label occurrences in a population of vertex labels."""
        return cls(np.bincount(np.asarray(labels, dtype=np.int64), minlength=num_labels))

    @property
    def counts(self) -> np.ndarray:
        """Read-only count vector of shape (l,)."""
        return self._counts

    @property
    def num_labels(self) -> int:
        return int(self._counts.size)

    @property
    def population(self) -> int:
        return self._population

    def proportions(self) -> np.ndarray:
        return self._counts / self._population

    def _check_dimension(self, other: "LabelDistribution") -> None:
        if self.num_labels != other.num_labels:
            raise DimensionMismatchError(
                f"Cannot compare distributions over {self.num_labels} "
                f"and {other.num_labels} labels"
            )

    def distance(self, other: "LabelDistribution") -> float:
        """Total-variation distance between the normalized distributions.

        Symmetric, zero iff the proportions are identical, and in [0, 1].

        Raises:
            DimensionMismatchError: If the label counts differ.
        """
        self._check_dimension(other)
        diff = np.abs(self.proportions() - other.proportions()).sum()
        return float(min(1.0, 0.5 * diff))

    def deficiencies(self, global_ld: "LabelDistribution", alpha: float) -> LabelSet:
        """Labels whose addition would move this distribution toward `global_ld`.

        Returns an empty set when this distribution is already within
        `alpha` of `global_ld`. Otherwise label i is a member when its global
        proportion exceeds its proportion here by more than alpha / l, and
        one more count of label i strictly lowers the distance to
        `global_ld`. Small populations can overshoot: a single extra count
        may move a proportion past the global one, and such labels are left
        out. A distribution farther than alpha can therefore still have an
        empty set.

        Args:
            global_ld: Reference (global) distribution.
            alpha: Proximity tolerance in [0, 1].

        Raises:
            DimensionMismatchError: If the label counts differ.
            ValueError: If alpha is outside [0, 1].
        """
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {alpha}")
        self._check_dimension(global_ld)

        defs = LabelSet()
        current = self.distance(global_ld)
        if current <= alpha:
            return defs

        shortfall = global_ld.proportions() - self.proportions()
        slack = alpha / self.num_labels
        for label in np.flatnonzero(shortfall > slack):
            if self.grown(int(label)).distance(global_ld) < current:
                defs.add(int(label))
        return defs

    def grown(self, label: int) -> "LabelDistribution":
        """Copy of this distribution with one more count of `label`."""
        if not 0 <= label < self.num_labels:
            raise ValueError(f"label {label} out of range [0, {self.num_labels})")
        counts = self._counts.copy()
        counts[label] += 1
        return LabelDistribution(counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelDistribution):
            return NotImplemented
        return np.array_equal(self._counts, other._counts)

    def __hash__(self) -> int:
        return hash(self._counts.tobytes())

    def __repr__(self) -> str:
        return f"LabelDistribution({self._counts.tolist()})"
