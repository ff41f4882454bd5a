"""
Tests for domain models.
"""

import pytest

from slotmatcher.domain.exceptions import InvalidBookingTimeError
from slotmatcher.domain.models import (
    AvailabilityRecord,
    EmployeeIdentity,
    RequestedBooking,
    TargetSelector,
    TimeOfDay,
)


class TestTimeOfDay:
    """Tests for TimeOfDay model."""

    def test_parse_full_time(self):
        """Test parsing an HH:MM:SS string."""
        tod = TimeOfDay.parse("09:45:30")

        assert (tod.hour, tod.minute, tod.second) == (9, 45, 30)
        assert str(tod) == "09:45:30"

    def test_parse_without_seconds(self):
        """Test that seconds default to zero."""
        assert TimeOfDay.parse("07:05") == TimeOfDay(7, 5, 0)

    def test_total_minutes(self):
        """Test fractional minute offset since midnight."""
        assert TimeOfDay.parse("01:30:30").total_minutes() == 90.5

    @pytest.mark.parametrize("value", ["9am", "09-00-00", "", "09:00:00:00", "ab:cd"])
    def test_parse_rejects_malformed(self, value):
        """Test that malformed strings raise ValueError."""
        with pytest.raises(ValueError, match="Invalid time of day"):
            TimeOfDay.parse(value)

    def test_out_of_range_raises_error(self):
        """Test that components outside their natural range are rejected."""
        with pytest.raises(ValueError, match="Hour must be between 0 and 23"):
            TimeOfDay.parse("24:00:00")
        with pytest.raises(ValueError, match="Minute must be between 0 and 59"):
            TimeOfDay.parse("10:60:00")


class TestRequestedBooking:
    """Tests for booking timestamp extraction."""

    def test_extracts_date_and_time(self):
        """Test literal extraction from an ISO timestamp."""
        booking = RequestedBooking.from_iso("2025-09-10T09:00:00-05:00")

        assert booking.raw == "2025-09-10T09:00:00-05:00"
        assert booking.date_key == "2025-09-10"
        assert booking.time == "09:00:00"

    def test_offset_does_not_shift_local_time(self):
        """Test that a large offset is not converted away."""
        booking = RequestedBooking.from_iso("2025-09-10T23:30:00+14:00")

        assert booking.date_key == "2025-09-10"
        assert booking.time == "23:30:00"

    def test_fallback_parser_for_missing_seconds(self):
        """Test that timestamps without seconds still yield a time."""
        booking = RequestedBooking.from_iso("2025-09-10T09:15")

        assert booking.date_key == "2025-09-10"
        assert booking.time == "09:15:00"

    def test_fallback_parser_supplies_date_key(self):
        """Test that a space-separated timestamp yields both date and time."""
        booking = RequestedBooking.from_iso("2025-09-10 09:00:00")

        assert booking.date_key == "2025-09-10"
        assert booking.time == "09:00:00"

    def test_unparseable_timestamp_raises_error(self):
        """Test that garbage input raises InvalidBookingTimeError."""
        with pytest.raises(InvalidBookingTimeError):
            RequestedBooking.from_iso("tomorrow morning")


class TestTargetSelector:
    """Tests for TargetSelector matching."""

    def test_matches_by_id_or_name(self):
        """Test that either field alone is enough."""
        identity = EmployeeIdentity(id="6", name="Mehmet")

        assert TargetSelector(id="6").matches(identity)
        assert TargetSelector(name="Mehmet").matches(identity)
        assert TargetSelector(id="99", name="Mehmet").matches(identity)
        assert not TargetSelector(id="7", name="Nadi").matches(identity)

    def test_id_comparison_is_type_strict(self):
        """Test that "6" and 6 are different ids."""
        assert not TargetSelector(id=6).matches(EmployeeIdentity(id="6"))

    def test_bool_id_never_matches_number(self):
        """Test that True and 1 are different ids."""
        assert not TargetSelector(id=1).matches(EmployeeIdentity(id=True))
        assert not TargetSelector(id=True).matches(EmployeeIdentity(id=1))
        assert TargetSelector(id=6).matches(EmployeeIdentity(id=6.0))

    def test_non_string_name_matches(self):
        """Test that names are compared as given."""
        assert TargetSelector(name=42).matches(EmployeeIdentity(name=42))

    def test_empty_selector_matches_nothing(self):
        """Test that unset fields never match unset identity fields."""
        assert not TargetSelector().matches(EmployeeIdentity())


class TestAvailabilityRecord:
    """Tests for AvailabilityRecord model."""

    def test_slots_for_missing_date_is_empty(self):
        """Test that an absent date key yields no slots."""
        record = AvailabilityRecord(
            identity=EmployeeIdentity(id="1", name="A"),
            slots_by_date={"2025-09-10": ("09:00:00",)}
        )

        assert record.slots_for("2025-09-10") == ("09:00:00",)
        assert record.slots_for("2025-09-11") == ()
