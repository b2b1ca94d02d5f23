"""Position ordering rules for sibling entities.

Cards in a list and lists in a board share one invariant: for a fixed
container the positions are exactly ``{0, 1, ..., n-1}``. Every mutation
keeps it by shifting only the siblings between the old and new slot
(a *range shift*) instead of renumbering the whole container.

This module plans shifts. Applying them is the job of
:class:`boardctl.infrastructure.database.ordering.OrderedCollection`.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class RangeShift:
    """Add *delta* to every sibling whose position is in ``[low, high]``.

    ``high=None`` leaves the range open-ended.
    """

    low: int
    high: int | None
    delta: int


def is_valid_position(value: object) -> bool:
    """A position is a non-negative ``int``; ``bool`` does not count."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def shift_for_move(current: int, requested: int) -> RangeShift | None:
    """Plan the sibling shift for a same-container move.

    Moving later decrements ``(current, requested]``; moving earlier
    increments ``[requested, current)``. Returns None for a no-op.

    Examples:
        >>> shift_for_move(0, 2)
        RangeShift(low=1, high=2, delta=-1)
        >>> shift_for_move(2, 0)
        RangeShift(low=0, high=1, delta=1)
        >>> shift_for_move(1, 1) is None
        True
    """
    if requested == current:
        return None
    if requested > current:
        return RangeShift(low=current + 1, high=requested, delta=-1)
    return RangeShift(low=requested, high=current - 1, delta=1)


def shift_for_removal(position: int) -> RangeShift:
    """Close the gap left at *position*: decrement everything after it."""
    return RangeShift(low=position + 1, high=None, delta=-1)


def shift_for_insertion(position: int) -> RangeShift:
    """Open a slot at *position*: increment everything at or after it."""
    return RangeShift(low=position, high=None, delta=1)


def clamp_position(requested: int, size: int) -> int:
    """Clamp *requested* into ``[0, size]``; *size* is the last valid slot."""
    return max(0, min(requested, size))


def density_issues(positions: Iterable[int]) -> list[str]:
    """Describe how *positions* deviate from a dense ``0..n-1`` run.

    Returns an empty list for a valid container.
    """
    values = list(positions)
    counts = Counter(values)
    issues: list[str] = []

    duplicates = sorted(p for p, n in counts.items() if n > 1)
    if duplicates:
        issues.append(f"duplicate positions: {duplicates}")

    expected = set(range(len(values)))
    missing = sorted(expected - counts.keys())
    if missing:
        issues.append(f"missing positions: {missing}")

    beyond = sorted(p for p in counts if p >= len(values))
    if beyond:
        issues.append(f"positions past the end: {beyond}")

    return issues
