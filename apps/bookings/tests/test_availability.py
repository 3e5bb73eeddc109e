"""Tests for slot, calendar and date availability queries."""

from __future__ import annotations

from datetime import timedelta

from django.test import TestCase

from apps.bookings import availability
from apps.bookings.models import Booking
from apps.bookings.services import BookingRequest, create_booking, update_status
from apps.users.roles import resolve_actor_role
from shared.domain.exceptions import InvalidArgument
from shared.testing import MarketplaceFixturesMixin, local_dt


class AvailabilityTests(MarketplaceFixturesMixin, TestCase):
    def _book(self, day, start_hour, end_hour, **overrides) -> Booking:
        values = {
            "sport_id": self.sport.pk,
            "booking_type": Booking.Kind.FACILITY,
            "start_time": local_dt(day, start_hour),
            "end_time": local_dt(day, end_hour),
            "facility_id": self.facility.pk,
        }
        values.update(overrides)
        return create_booking(BookingRequest(**values), self.player).booking

    def test_booked_slot_is_excluded(self) -> None:
        self._book(self.day, 14, 15)

        schedule = availability.get_slots(self.facility.pk, None, self.day)

        available = list(schedule.available())
        self.assertEqual(len(available), 15)
        self.assertNotIn(local_dt(self.day, 14), [slot.start for slot in available])
        self.assertIn(local_dt(self.day, 15), [slot.start for slot in available])

    def test_schedule_covers_operating_hours(self) -> None:
        schedule = availability.get_slots(self.facility.pk, None, self.day)

        slots = list(schedule)
        self.assertEqual(len(schedule), 16)
        self.assertEqual(len(slots), 16)
        self.assertEqual(slots[0].start, local_dt(self.day, 6))
        self.assertEqual(slots[-1].end, local_dt(self.day, 22))
        self.assertTrue(all(slot.available for slot in slots))
        # restartable
        self.assertEqual(list(schedule), slots)

    def test_multi_hour_booking_blocks_every_touched_slot(self) -> None:
        self._book(self.day, 9, 12)

        unavailable = [slot.start.hour for slot in availability.get_slots(self.facility.pk, None, self.day).unavailable()]

        self.assertEqual(unavailable, [9, 10, 11])

    def test_coach_bookings_block_coach_slots(self) -> None:
        self._book(self.day, 18, 19, booking_type=Booking.Kind.BOTH, coach_id=self.coach.pk)

        schedule = availability.get_slots(None, self.coach.pk, self.day)

        self.assertEqual([slot.start.hour for slot in schedule.unavailable()], [18])

    def test_cancelled_booking_does_not_block(self) -> None:
        booking = self._book(self.day, 14, 15)
        update_status(booking.id, Booking.Status.CANCELLED, resolve_actor_role(self.admin))

        schedule = availability.get_slots(self.facility.pk, None, self.day)

        self.assertEqual(len(list(schedule.available())), 16)

    def test_resource_and_date_are_required(self) -> None:
        with self.assertRaises(InvalidArgument):
            availability.get_slots(None, None, self.day)
        with self.assertRaises(InvalidArgument):
            availability.get_slots(self.facility.pk, None, None)

    def test_calendar_lists_booked_dates(self) -> None:
        second_day = self.day + timedelta(days=2)
        self._book(second_day, 8, 9)
        self._book(self.day, 10, 11)
        self._book(self.day, 16, 17)

        dates = availability.get_calendar(self.facility.pk, None, self.day, self.day + timedelta(days=5))

        self.assertEqual(dates, [self.day, second_day])

    def test_calendar_respects_range(self) -> None:
        self._book(self.day + timedelta(days=10), 8, 9)

        dates = availability.get_calendar(self.facility.pk, None, self.day, self.day + timedelta(days=5))

        self.assertEqual(dates, [])

    def test_calendar_rejects_inverted_range(self) -> None:
        with self.assertRaises(InvalidArgument):
            availability.get_calendar(self.facility.pk, None, self.day, self.day - timedelta(days=1))

    def test_date_availability_reports_booked_intervals(self) -> None:
        self._book(self.day, 14, 15)

        result = availability.get_date_availability(self.facility.pk, None, self.day)

        self.assertTrue(result.is_fully_booked)
        self.assertEqual(len(result.unavailable_slots), 1)
        self.assertEqual(result.unavailable_slots[0].start, local_dt(self.day, 14))

    def test_free_date_is_not_fully_booked(self) -> None:
        result = availability.get_date_availability(self.facility.pk, None, self.day)

        self.assertFalse(result.is_fully_booked)
        self.assertEqual(result.to_dict(), {"unavailable_slots": [], "is_fully_booked": False})
