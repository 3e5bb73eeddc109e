"""Availability queries for facilities and coaches.

Days are interpreted in the current Django timezone. Only pending and
confirmed bookings occupy time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List

from django.utils import timezone  # type: ignore

from shared.domain.exceptions import InvalidArgument
from shared.domain.value_objects import TimeRange

from .domain.timeslots import SlotSchedule
from .models import Booking


@dataclass(frozen=True)
class DateAvailability:
    unavailable_slots: List[TimeRange]
    is_fully_booked: bool

    def to_dict(self) -> dict:
        return {
            "unavailable_slots": [
                {"start": slot.start.isoformat(), "end": slot.end.isoformat()}
                for slot in self.unavailable_slots
            ],
            "is_fully_booked": self.is_fully_booked,
        }


def _require_resource(facility_id, coach_id) -> None:
    if not facility_id and not coach_id:
        raise InvalidArgument("Either facility or coach is required", target="resource")


def _day_bounds(day: date, tz) -> TimeRange:
    start = datetime.combine(day, time.min, tzinfo=tz)
    return TimeRange(start, start + timedelta(days=1))


def _busy_periods(facility_id, coach_id, window: TimeRange, tz) -> List[TimeRange]:
    bookings = (
        Booking.objects.active()
        .for_resources(facility=facility_id, coach=coach_id)
        .overlapping(window.start, window.end)
        .order_by("start_time")
        .values_list("start_time", "end_time")
    )
    return [TimeRange(timezone.localtime(start, tz), timezone.localtime(end, tz)) for start, end in bookings]


def get_slots(facility_id=None, coach_id=None, day: date | None = None) -> SlotSchedule:
    """Hourly slots between 06:00 and 22:00 with their availability."""
    _require_resource(facility_id, coach_id)
    if day is None:
        raise InvalidArgument("Date is required", target="date")

    tz = timezone.get_current_timezone()
    busy = _busy_periods(facility_id, coach_id, _day_bounds(day, tz), tz)
    return SlotSchedule(day, busy, tz)


def get_calendar(facility_id=None, coach_id=None, start_date: date | None = None, end_date: date | None = None) -> List[date]:
    """Sorted local dates in [start_date, end_date] with at least one booking.

    A date counts as unavailable as soon as any booking starts on it, even
    if other slots of that day are free.
    """
    _require_resource(facility_id, coach_id)
    if start_date is None or end_date is None:
        raise InvalidArgument("Start and end dates are required", target="date")
    if start_date > end_date:
        raise InvalidArgument("Start date must not be after end date", target="date")

    tz = timezone.get_current_timezone()
    range_start = _day_bounds(start_date, tz).start
    range_end = _day_bounds(end_date, tz).end

    starts = (
        Booking.objects.active()
        .for_resources(facility=facility_id, coach=coach_id)
        .filter(start_time__gte=range_start, start_time__lt=range_end)
        .values_list("start_time", flat=True)
    )
    return sorted({timezone.localtime(start, tz).date() for start in starts})


def get_date_availability(facility_id=None, coach_id=None, day: date | None = None) -> DateAvailability:
    _require_resource(facility_id, coach_id)
    if day is None:
        raise InvalidArgument("Date is required", target="date")

    tz = timezone.get_current_timezone()
    busy = _busy_periods(facility_id, coach_id, _day_bounds(day, tz), tz)
    # coarse signal: any booking marks the day as fully booked
    return DateAvailability(unavailable_slots=busy, is_fully_booked=bool(busy))
