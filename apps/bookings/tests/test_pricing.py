"""Unit tests for booking pricing and the slot schedule."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from apps.bookings.domain.pricing import calculate_price, calculate_service_fee
from apps.bookings.domain.timeslots import SlotSchedule
from shared.domain.value_objects import Money, TimeRange

START = datetime(2030, 5, 4, 10, 0, tzinfo=timezone.utc)


def _period(hours: float) -> TimeRange:
    return TimeRange(START, START + timedelta(hours=hours))


def test_facility_only_price():
    price = calculate_price(_period(2), currency="NGN", facility_rate=Decimal("20000"))

    assert price.subtotal == Money(Decimal("40000.00"), "NGN")
    assert price.service_fee.amount == Decimal("3000.00")
    assert price.total.amount == Decimal("43000.00")


def test_facility_and_coach_price():
    price = calculate_price(
        _period(1),
        currency="NGN",
        facility_rate=Decimal("20000"),
        coach_rate=Decimal("15000"),
    )

    assert price.as_fields() == {
        "subtotal": Decimal("35000.00"),
        "service_fee": Decimal("2625.00"),
        "total_amount": Decimal("37625.00"),
        "currency": "NGN",
    }


def test_package_ignores_duration():
    price = calculate_price(
        _period(3),
        currency="NGN",
        coach_rate=Decimal("15000"),
        package_price=Decimal("12000"),
    )

    assert price.subtotal.amount == Decimal("12000.00")
    assert price.service_fee.amount == Decimal("900.00")
    assert price.total.amount == Decimal("12900.00")


def test_partial_hours_are_prorated():
    price = calculate_price(_period(1.5), currency="NGN", coach_rate=Decimal("15000"))

    assert price.subtotal.amount == Decimal("22500.00")
    assert price.service_fee.amount == Decimal("1687.50")


@pytest.mark.parametrize(
    "subtotal, fee",
    [
        ("100.00", "7.50"),
        ("0.10", "0.01"),
        ("0.06", "0.00"),
        ("12345.67", "925.93"),
    ],
)
def test_service_fee_rounds_half_up(subtotal, fee):
    assert calculate_service_fee(Money(Decimal(subtotal), "NGN")).amount == Decimal(fee)


def test_time_range_is_half_open():
    first = _period(1)
    second = TimeRange(first.end, first.end + timedelta(hours=1))

    assert not first.overlaps_with(second)
    assert first.overlaps_with(TimeRange(START + timedelta(minutes=30), START + timedelta(minutes=90)))


def test_empty_time_range_is_rejected():
    with pytest.raises(ValueError):
        TimeRange(START, START)


def test_slot_schedule_marks_busy_slots():
    day = date(2030, 5, 4)
    busy = [TimeRange(START.replace(hour=14), START.replace(hour=15))]

    schedule = SlotSchedule(day, busy, timezone.utc)

    assert len(list(schedule)) == 16
    assert [slot.start.hour for slot in schedule.unavailable()] == [14]
    assert len(list(schedule.available())) == 15
    assert next(schedule.available()).to_dict() == {
        "start": "2030-05-04T06:00:00+00:00",
        "end": "2030-05-04T07:00:00+00:00",
        "available": True,
    }
