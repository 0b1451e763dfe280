"""Fixed-capacity bit-set over label ids, used as a per-vertex deficiency mask."""

from collections.abc import Iterable, Iterator

from graphanon.graph.labelled import MAX_LABELS


class LabelSet:
    """Mutable set of label ids in [0, capacity), stored as an int bitmask.

    Bit i set means label i is a member. Iteration yields labels in
    increasing order.
    """

    __slots__ = ("_bits", "_capacity")

    def __init__(self, labels: Iterable[int] = (), capacity: int = MAX_LABELS) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._bits = 0
        for label in labels:
            self.add(label)

    @classmethod
    def from_mask(cls, mask: int, capacity: int = MAX_LABELS) -> "LabelSet":
        if mask < 0 or mask >> capacity:
            raise ValueError(f"mask {mask:#x} does not fit in {capacity} bits")
        labels = cls(capacity=capacity)
        labels._bits = mask
        return labels

    @property
    def capacity(self) -> int:
        return self._capacity

    def _check(self, label: int) -> None:
        if not 0 <= label < self._capacity:
            raise ValueError(
                f"label {label} out of range [0, {self._capacity})"
            )

    def add(self, label: int) -> None:
        self._check(label)
        self._bits |= 1 << label

    def clear(self, label: int) -> None:
        """Remove label from the set (no-op if absent)."""
        self._check(label)
        self._bits &= ~(1 << label)

    def lowest_set(self) -> int:
        """Smallest member label.

        Raises:
            ValueError: If the set is empty.
        """
        if not self._bits:
            raise ValueError("lowest_set() on an empty LabelSet")
        return (self._bits & -self._bits).bit_length() - 1

    def is_empty(self) -> bool:
        return self._bits == 0

    def popcount(self) -> int:
        return bin(self._bits).count("1")

    def to_mask(self) -> int:
        return self._bits

    def copy(self) -> "LabelSet":
        return LabelSet.from_mask(self._bits, self._capacity)

    def __contains__(self, label: object) -> bool:
        return (
            isinstance(label, int)
            and 0 <= label < self._capacity
            and bool(self._bits >> label & 1)
        )

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        while bits:
            low = bits & -bits
            yield low.bit_length() - 1
            bits ^= low

    def __len__(self) -> int:
        return self.popcount()

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabelSet):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"LabelSet({list(self)})"
