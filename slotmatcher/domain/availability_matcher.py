"""
Core business logic for matching a booking request to employee availability.

Pure domain logic: no I/O and no state shared between calls, so one matcher
can serve any number of concurrent requests.
"""

from typing import List, Optional, Sequence

from .models import (
    AvailabilityRecord,
    BestAvailabilityEntry,
    EmployeeResult,
    MatchResult,
    RequestedBooking,
    TargetEmployeeAvailability,
    TargetSelector,
)
from .slot_ranking import DEFAULT_SLOT_LIMIT, rank_slots


class AvailabilityMatcher:
    """
    Ranks employee availability against a requested booking time.

    Algorithm:
    1. Split the booking timestamp into date key and time of day
    2. Rank each employee's slots for that date (best 3, midnight excluded)
    3. Order employees: available first, then by their closest slot
    4. Collect the globally closest slots across all employees
    5. Optionally resolve one target employee independently
    """

    def __init__(
        self,
        slots_per_employee: int = DEFAULT_SLOT_LIMIT,
        best_availability_size: int = DEFAULT_SLOT_LIMIT
    ):
        self.slots_per_employee = slots_per_employee
        self.best_availability_size = best_availability_size

    def match(
        self,
        booking_time: str,
        employees: Sequence[AvailabilityRecord],
        target: Optional[TargetSelector] = None
    ) -> MatchResult:
        """
        Match a booking time against a list of employees.

        Args:
            booking_time: ISO-8601-like timestamp, e.g. "2025-09-10T09:00:00-05:00"
            employees: Availability records in caller order
            target: Optional selector for a single employee

        Returns:
            MatchResult with ranked employees, global best slots and the
            target employee block (None when no target was requested)
        """
        booking = RequestedBooking.from_iso(booking_time)

        # Step 1: Rank every employee independently
        results = [
            self._rank_employee(employee, booking)
            for employee in employees
        ]

        # Step 2: Order employees by their best match
        ordered = self._order_employees(results)

        # Step 3: Global view across all employees
        best_availability = self._collect_best_availability(ordered)

        # Step 4: Target employee, if requested
        target_availability = None
        if target is not None:
            target_availability = self._resolve_target(employees, target, booking)

        return MatchResult(
            booking=booking,
            total_employees=len(employees),
            results=ordered,
            best_availability=best_availability,
            target_employee=target_availability,
        )

    def _rank_employee(
        self,
        employee: AvailabilityRecord,
        booking: RequestedBooking
    ) -> EmployeeResult:
        """Rank one employee's slots for the requested date."""
        slots = employee.slots_for(booking.date_key)

        return EmployeeResult(
            identity=employee.identity,
            requested_time=booking.time,
            best_slots=rank_slots(slots, booking.time, self.slots_per_employee),
            total_available_slots=len(slots),
        )

    @staticmethod
    def _order_employees(results: List[EmployeeResult]) -> List[EmployeeResult]:
        """
        Available employees first, closest slot first among them.

        sorted() is stable: employees without availability, and ties, keep
        their input order.
        """
        return sorted(
            results,
            key=lambda result: (
                not result.has_availability,
                result.closest_difference if result.has_availability else 0.0,
            )
        )

    def _collect_best_availability(
        self,
        results: List[EmployeeResult]
    ) -> List[BestAvailabilityEntry]:
        """Flatten every employee's best slots and keep the closest overall."""
        entries: List[BestAvailabilityEntry] = []

        for result in results:
            if result.has_availability:
                entries.extend(result.best_entries())

        entries.sort(key=lambda entry: entry.slot.difference_minutes)

        return entries[:self.best_availability_size]

    def _resolve_target(
        self,
        employees: Sequence[AvailabilityRecord],
        target: TargetSelector,
        booking: RequestedBooking
    ) -> TargetEmployeeAvailability:
        """
        Find the first employee matching the selector in caller order and
        rank its slots afresh.
        """
        for employee in employees:
            if target.matches(employee.identity):
                result = self._rank_employee(employee, booking)
                return TargetEmployeeAvailability(results=result.best_entries())

        return TargetEmployeeAvailability(results=[])
