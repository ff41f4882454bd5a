"""
Time distance and best-slot selection primitives.
"""

from typing import List, Optional, Sequence

from .models import IGNORED_SLOT, RankedSlot, TimeOfDay

DEFAULT_SLOT_LIMIT = 3


def minute_distance(first: str | TimeOfDay, second: str | TimeOfDay) -> float:
    """
    Absolute difference in minutes between two times of day.

    The comparison never wraps across midnight: 23:59:59 and 00:00:01 are
    almost a full day apart.
    """
    if not isinstance(first, TimeOfDay):
        first = TimeOfDay.parse(first)
    if not isinstance(second, TimeOfDay):
        second = TimeOfDay.parse(second)

    return abs(first.total_minutes() - second.total_minutes())


def rank_slots(
    slots: Optional[Sequence[str]],
    requested_time: str,
    limit: int = DEFAULT_SLOT_LIMIT
) -> List[RankedSlot]:
    """
    Rank slots by closeness to the requested time.

    Args:
        slots: Slot strings for one day, may be empty or None
        requested_time: Requested time of day (HH:MM:SS)
        limit: Maximum number of slots to return

    Returns:
        Up to ``limit`` ranked slots, closest first. Ties keep input order.
    """
    if not slots:
        return []

    requested = TimeOfDay.parse(requested_time)

    ranked = [
        RankedSlot(time=slot, difference_minutes=minute_distance(slot, requested))
        for slot in slots
        if slot != IGNORED_SLOT
    ]

    # list.sort is stable, so equal distances stay in input order
    ranked.sort(key=lambda item: item.difference_minutes)

    return ranked[:limit]


def select_best_slots(
    slots: Optional[Sequence[str]],
    requested_time: str,
    limit: int = DEFAULT_SLOT_LIMIT
) -> List[str]:
    """Return the best slot strings, closest to ``requested_time`` first."""
    return [item.time for item in rank_slots(slots, requested_time, limit)]
