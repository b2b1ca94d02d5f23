"""Tests for range-shift planning and position rules."""

import pytest

from boardctl.domain.ordering import (
    RangeShift,
    clamp_position,
    density_issues,
    is_valid_position,
    shift_for_insertion,
    shift_for_move,
    shift_for_removal,
)


def apply(positions: dict[str, int], moved: str, requested: int) -> dict[str, int]:
    """Apply ``shift_for_move`` to an in-memory container."""
    result = dict(positions)
    plan = shift_for_move(positions[moved], requested)
    if plan is None:
        return result
    for key, pos in positions.items():
        if key == moved:
            continue
        if pos >= plan.low and (plan.high is None or pos <= plan.high):
            result[key] = pos + plan.delta
    result[moved] = requested
    return result


class TestIsValidPosition:
    @pytest.mark.parametrize("value", [0, 1, 42])
    def test_accepts_non_negative_ints(self, value: int) -> None:
        assert is_valid_position(value)

    @pytest.mark.parametrize("value", [-1, 1.0, "2", None, True, False])
    def test_rejects_everything_else(self, value: object) -> None:
        assert not is_valid_position(value)


class TestShiftForMove:
    def test_same_position_is_noop(self) -> None:
        assert shift_for_move(3, 3) is None

    def test_moving_later_decrements_the_range_after(self) -> None:
        assert shift_for_move(0, 2) == RangeShift(low=1, high=2, delta=-1)

    def test_moving_earlier_increments_the_range_before(self) -> None:
        assert shift_for_move(2, 0) == RangeShift(low=0, high=1, delta=1)

    def test_later_move_example(self) -> None:
        assert apply({"a": 0, "b": 1, "c": 2}, "a", 2) == {"b": 0, "c": 1, "a": 2}

    def test_earlier_move_example(self) -> None:
        assert apply({"a": 0, "b": 1, "c": 2}, "c", 0) == {"c": 0, "a": 1, "b": 2}

    @pytest.mark.parametrize("current", range(5))
    @pytest.mark.parametrize("requested", range(5))
    def test_dense_stays_dense(self, current: int, requested: int) -> None:
        names = "abcde"
        positions = {n: i for i, n in enumerate(names)}
        result = apply(positions, names[current], requested)
        assert sorted(result.values()) == list(range(5))


class TestRemovalAndInsertion:
    def test_removal_closes_gap_after(self) -> None:
        assert shift_for_removal(2) == RangeShift(low=3, high=None, delta=-1)

    def test_insertion_opens_slot_at(self) -> None:
        assert shift_for_insertion(2) == RangeShift(low=2, high=None, delta=1)


class TestClampPosition:
    def test_within_range_unchanged(self) -> None:
        assert clamp_position(2, 4) == 2

    def test_past_the_end_clamped(self) -> None:
        assert clamp_position(99, 4) == 4

    def test_empty_container_clamps_to_zero(self) -> None:
        assert clamp_position(5, 0) == 0


class TestDensityIssues:
    def test_dense_is_clean(self) -> None:
        assert density_issues([2, 0, 1]) == []

    def test_empty_is_clean(self) -> None:
        assert density_issues([]) == []

    def test_duplicates(self) -> None:
        issues = density_issues([0, 1, 1])
        assert any("duplicate positions: [1]" in i for i in issues)

    def test_trailing_gap(self) -> None:
        issues = density_issues([0, 1, 5])
        assert any("missing positions: [2]" in i for i in issues)
        assert any("past the end: [5]" in i for i in issues)
