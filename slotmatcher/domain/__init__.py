"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_matcher import AvailabilityMatcher
from .models import (
    AvailabilityRecord,
    BestAvailabilityEntry,
    EmployeeIdentity,
    EmployeeResult,
    MatchResult,
    RankedSlot,
    RequestedBooking,
    TargetEmployeeAvailability,
    TargetSelector,
    TimeOfDay,
)
from .slot_ranking import minute_distance, rank_slots, select_best_slots

__all__ = [
    "AvailabilityMatcher",
    "AvailabilityRecord",
    "BestAvailabilityEntry",
    "EmployeeIdentity",
    "EmployeeResult",
    "MatchResult",
    "RankedSlot",
    "RequestedBooking",
    "TargetEmployeeAvailability",
    "TargetSelector",
    "TimeOfDay",
    "minute_distance",
    "rank_slots",
    "select_best_slots",
]
