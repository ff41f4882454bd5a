"""
Domain models for booking requests, employee availability and ranked results.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pendulum
from pendulum import DateTime, Time

from .exceptions import InvalidBookingTimeError

# Midnight is a placeholder in upstream calendars, never a real opening.
IGNORED_SLOT = "00:00:00"

_TIME_PATTERN = re.compile(r"T(\d{2}:\d{2}:\d{2})")
_DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})T")


def _same_value(left: Any, right: Any) -> bool:
    """Equality without bool/number crossover: True never equals 1."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def _json_number(value: float) -> float | int:
    """Whole minutes serialize as integers (45, not 45.0)."""
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class TimeOfDay:
    """
    Wall-clock time with second precision.

    Invariant: hour in 0-23, minute and second in 0-59.
    """
    hour: int
    minute: int
    second: int = 0

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {self.minute}")
        if not 0 <= self.second <= 59:
            raise ValueError(f"Second must be between 0 and 59, got {self.second}")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """
        Parse an ``HH:MM:SS`` (or ``HH:MM``) string.

        Raises:
            ValueError: If the string is not a valid time of day
        """
        parts = value.split(":") if isinstance(value, str) else []
        if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid time of day: {value!r}")

        return cls(*(int(part) for part in parts))

    def total_minutes(self) -> float:
        """Return the fractional number of minutes since midnight."""
        return self.hour * 60 + self.minute + self.second / 60

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"


@dataclass(frozen=True)
class RequestedBooking:
    """
    The requested booking timestamp and the parts extracted from it.

    Extraction is literal: whatever offset the timestamp carries is ignored so
    the intended local time is never shifted.
    """
    raw: str
    date_key: str
    time: str

    @classmethod
    def from_iso(cls, booking_time: str) -> "RequestedBooking":
        """
        Split an ISO-8601-like timestamp into date key and time of day.

        Example: "2025-09-10T09:00:00-05:00" -> ("2025-09-10", "09:00:00")

        Shapes the literal patterns miss, such as "2025-09-10 09:00", go
        through pendulum; date and time then both come from the parsed value
        in its own offset.

        Raises:
            InvalidBookingTimeError: If no time of day can be extracted
        """
        date_match = _DATE_PATTERN.match(booking_time)
        time_match = _TIME_PATTERN.search(booking_time)

        if date_match and time_match:
            return cls(raw=booking_time, date_key=date_match.group(1), time=time_match.group(1))

        parsed = cls._parse(booking_time, required=time_match is None)

        if time_match:
            time = time_match.group(1)
        elif isinstance(parsed, (DateTime, Time)):
            time = parsed.strftime("%H:%M:%S")
        else:
            raise InvalidBookingTimeError(
                "client_booking_time is not a valid timestamp",
                f"No time of day found in {booking_time!r}",
            )

        if date_match:
            date_key = date_match.group(1)
        elif isinstance(parsed, DateTime):
            date_key = parsed.to_date_string()
        else:
            date_key = booking_time.split("T")[0]

        return cls(raw=booking_time, date_key=date_key, time=time)

    @staticmethod
    def _parse(booking_time: str, required: bool) -> Any:
        """Parse with pendulum; failure is fatal only when nothing else can supply a time."""
        try:
            return pendulum.parse(booking_time)
        except ValueError as exc:
            if required:
                raise InvalidBookingTimeError(
                    "client_booking_time is not a valid timestamp", str(exc)
                ) from exc
            return None


@dataclass(frozen=True)
class EmployeeIdentity:
    """Identity fields echoed back with every result row."""
    id: Any = None
    name: Any = None
    email: Any = None
    phone: Any = None
    description: Any = None


@dataclass(frozen=True)
class AvailabilityRecord:
    """
    One employee's availability: identity plus slot strings keyed by date.
    """
    identity: EmployeeIdentity
    slots_by_date: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def slots_for(self, date_key: str) -> Tuple[str, ...]:
        """Return the raw slot list for a date; a missing date has no slots."""
        return tuple(self.slots_by_date.get(date_key) or ())


@dataclass(frozen=True)
class TargetSelector:
    """Selects a single employee by id or by name."""
    id: Any = None
    name: Any = None

    def matches(self, identity: EmployeeIdentity) -> bool:
        """Check whether either the id or the name matches."""
        if self.id is not None and _same_value(identity.id, self.id):
            return True
        return self.name is not None and _same_value(identity.name, self.name)


@dataclass(frozen=True)
class RankedSlot:
    """A slot paired with its distance in minutes from the requested time."""
    time: str
    difference_minutes: float


@dataclass
class BestAvailabilityEntry:
    """One employee slot in a cross-employee ranking."""
    identity: EmployeeIdentity
    slot: RankedSlot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employee_id": self.identity.id,
            "employee_name": self.identity.name,
            "employee_email": self.identity.email,
            "employee_phone": self.identity.phone,
            "employee_description": self.identity.description,
            "availability_time": self.slot.time,
            "time_difference_minutes": _json_number(self.slot.difference_minutes),
        }


@dataclass
class EmployeeResult:
    """
    Ranking outcome for a single employee on the requested date.
    """
    identity: EmployeeIdentity
    requested_time: str
    best_slots: List[RankedSlot]
    total_available_slots: int

    @property
    def has_availability(self) -> bool:
        return len(self.best_slots) > 0

    @property
    def best_available_times(self) -> List[str]:
        return [slot.time for slot in self.best_slots]

    @property
    def closest_difference(self) -> float | None:
        """Distance of the closest slot, or None without availability."""
        if not self.best_slots:
            return None
        return self.best_slots[0].difference_minutes

    def best_entries(self) -> List[BestAvailabilityEntry]:
        """Expand the best slots into cross-employee ranking rows."""
        return [
            BestAvailabilityEntry(identity=self.identity, slot=slot)
            for slot in self.best_slots
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identity.id,
            "name": self.identity.name,
            "email": self.identity.email,
            "phone": self.identity.phone,
            "description": self.identity.description,
            "requested_time": self.requested_time,
            "best_available_times": self.best_available_times,
            "total_available_slots": self.total_available_slots,
            "has_availability": self.has_availability,
        }


@dataclass
class TargetEmployeeAvailability:
    """
    Resolution of an explicitly requested employee.

    An unmatched selector is reported as an empty, unsuccessful result rather
    than being left out of the response.
    """
    results: List[BestAvailabilityEntry] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.results) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [entry.to_dict() for entry in self.results],
            "success": self.success,
        }


@dataclass
class MatchResult:
    """Complete outcome of one match request."""
    booking: RequestedBooking
    total_employees: int
    results: List[EmployeeResult]
    best_availability: List[BestAvailabilityEntry]
    target_employee: Optional[TargetEmployeeAvailability] = None

    @property
    def employees_with_availability(self) -> int:
        return sum(1 for result in self.results if result.has_availability)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON response shape."""
        target = self.target_employee.to_dict() if self.target_employee is not None else None

        return {
            "success": True,
            "requested_booking_time": self.booking.raw,
            "requested_time": self.booking.time,
            "requested_date": self.booking.date_key,
            "total_employees": self.total_employees,
            "employees_with_availability": self.employees_with_availability,
            "best_availability": [entry.to_dict() for entry in self.best_availability],
            "availability_target_employee": target,
            "results": [result.to_dict() for result in self.results],
        }
