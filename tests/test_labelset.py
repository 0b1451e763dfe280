"""Tests for the LabelSet deficiency bit-set."""

import pytest

from graphanon.proximity.labelset import LabelSet


class TestLabelSetBasics:
    """Membership, add/clear, and emptiness."""

    def test_empty_by_default(self) -> None:
        s = LabelSet()
        assert s.is_empty()
        assert s.popcount() == 0
        assert not s

    def test_add_and_contains(self) -> None:
        s = LabelSet([3, 0, 7])
        assert 3 in s and 0 in s and 7 in s
        assert 1 not in s
        assert s.popcount() == 3
        assert len(s) == 3

    def test_clear_removes_member(self) -> None:
        s = LabelSet([2, 5])
        s.clear(2)
        assert 2 not in s
        assert list(s) == [5]

    def test_clear_absent_is_noop(self) -> None:
        s = LabelSet([1])
        s.clear(4)
        assert list(s) == [1]

    def test_iteration_is_increasing(self) -> None:
        s = LabelSet([9, 1, 31, 4])
        assert list(s) == [1, 4, 9, 31]

    def test_highest_label_fits(self) -> None:
        s = LabelSet([31])
        assert s.lowest_set() == 31
        assert s.to_mask() == 1 << 31


class TestLowestSet:
    """lowest_set drives the greedy per-label loop."""

    def test_lowest_set(self) -> None:
        assert LabelSet([6, 2, 9]).lowest_set() == 2

    def test_drain_by_lowest_set(self) -> None:
        s = LabelSet([5, 0, 12])
        drained = []
        while not s.is_empty():
            label = s.lowest_set()
            drained.append(label)
            s.clear(label)
        assert drained == [0, 5, 12]

    def test_lowest_set_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            LabelSet().lowest_set()


class TestLabelSetBounds:
    """Capacity is enforced instead of silently wrapping bits."""

    def test_label_beyond_capacity_rejected(self) -> None:
        with pytest.raises(ValueError):
            LabelSet([32])

    def test_negative_label_rejected(self) -> None:
        with pytest.raises(ValueError):
            LabelSet().add(-1)

    def test_custom_capacity(self) -> None:
        s = LabelSet([63], capacity=64)
        assert 63 in s
        with pytest.raises(ValueError):
            LabelSet([4], capacity=4)

    def test_from_mask_round_trip(self) -> None:
        s = LabelSet.from_mask(0b10110)
        assert list(s) == [1, 2, 4]
        assert s.to_mask() == 0b10110

    def test_from_mask_too_wide(self) -> None:
        with pytest.raises(ValueError):
            LabelSet.from_mask(1 << 32)


class TestLabelSetCopyAndEquality:

    def test_copy_is_independent(self) -> None:
        s = LabelSet([1, 2])
        c = s.copy()
        c.clear(1)
        assert 1 in s
        assert 1 not in c

    def test_equality(self) -> None:
        assert LabelSet([1, 3]) == LabelSet([3, 1])
        assert LabelSet([1]) != LabelSet([2])

    def test_non_int_not_contained(self) -> None:
        assert "1" not in LabelSet([1])
