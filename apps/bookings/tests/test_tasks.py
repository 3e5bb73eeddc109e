"""Tests for periodic booking tasks and booking event handlers."""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from apps.bookings import handlers
from apps.bookings.domain.events import BookingConfirmed, BookingStatusChanged
from apps.bookings.models import Booking
from apps.bookings.services import BookingRequest, create_booking
from apps.bookings.tasks import complete_finished_bookings, send_upcoming_booking_reminders
from apps.chat.models import Conversation
from apps.notifications.models import Notification
from shared.application.message_bus import MessageBus
from shared.testing import MarketplaceFixturesMixin


class BookingTaskTestBase(MarketplaceFixturesMixin, TestCase):
    def _book_at(self, start, hours: int = 1, **overrides) -> Booking:
        values = {
            "sport_id": self.sport.pk,
            "booking_type": Booking.Kind.FACILITY,
            "start_time": start,
            "end_time": start + timedelta(hours=hours),
            "facility_id": self.facility.pk,
        }
        values.update(overrides)
        return create_booking(BookingRequest(**values), self.player).booking

    def _hour_from_now(self, hours: int):
        return (timezone.now() + timedelta(hours=hours)).replace(minute=0, second=0, microsecond=0)


class ReminderTaskTests(BookingTaskTestBase):
    def test_reminds_each_upcoming_booking_once(self) -> None:
        soon = self._book_at(self._hour_from_now(5))
        self._book_at(self._hour_from_now(50))

        result = send_upcoming_booking_reminders()

        self.assertEqual(result, {"sent": 1})
        soon.refresh_from_db()
        self.assertIsNotNone(soon.reminder_sent_at)
        notification = Notification.objects.get(user=self.player)
        self.assertEqual(notification.type, Notification.Type.BOOKING_REMINDER)
        self.assertEqual(notification.data["booking_id"], str(soon.id))
        self.assertEqual(len(mail.outbox), 1)
        self.assertTrue(mail.outbox[0].subject.startswith("Reminder:"))

        self.assertEqual(send_upcoming_booking_reminders(), {"sent": 0})

    def test_cancelled_bookings_are_not_reminded(self) -> None:
        booking = self._book_at(self._hour_from_now(5))
        Booking.objects.filter(pk=booking.pk).update(status=Booking.Status.CANCELLED)

        self.assertEqual(send_upcoming_booking_reminders(), {"sent": 0})


class CompletionTaskTests(BookingTaskTestBase):
    def test_completes_bookings_past_the_grace_period(self) -> None:
        finished = self._book_at(self._hour_from_now(-30))
        recent = self._book_at(self._hour_from_now(-3))

        with self.captureOnCommitCallbacks(execute=True):
            result = complete_finished_bookings()

        self.assertEqual(result, {"completed": 1})
        finished.refresh_from_db()
        recent.refresh_from_db()
        self.assertEqual(finished.status, Booking.Status.COMPLETED)
        self.assertEqual(recent.status, Booking.Status.CONFIRMED)

        notification = Notification.objects.get(user=self.player, type=Notification.Type.BOOKING_COMPLETED)
        self.assertEqual(notification.message, "Booking updated to completed")
        self.assertEqual(notification.data["changed_by"], "admin")

    def test_pending_bookings_are_left_alone(self) -> None:
        booking = self._book_at(self._hour_from_now(-30))
        Booking.objects.filter(pk=booking.pk).update(status=Booking.Status.PENDING)

        self.assertEqual(complete_finished_bookings(), {"completed": 0})


class BookingHandlerTests(BookingTaskTestBase):
    def test_register_handlers_is_idempotent(self) -> None:
        bus = MessageBus()

        handlers.register_handlers(bus)
        handlers.register_handlers(bus)

        self.assertEqual(
            bus.handlers_for(BookingConfirmed),
            [handlers.send_confirmation_email, handlers.provision_conversations],
        )
        self.assertEqual(bus.handlers_for(BookingStatusChanged), [handlers.notify_requester_of_status_change])

    def test_chat_failure_does_not_block_confirmation_email(self) -> None:
        booking = self._book_at(self._hour_from_now(48), booking_type=Booking.Kind.BOTH, coach_id=self.coach.pk)
        bus = MessageBus()
        handlers.register_handlers(bus)

        with mock.patch("apps.chat.services.get_chat_room_provider", side_effect=RuntimeError("chat down")):
            bus.publish_events([BookingConfirmed(booking_id=booking.id, user_id=self.player.pk)])

        self.assertEqual(len(mail.outbox), 1)
        self.assertFalse(Conversation.objects.filter(booking=booking).exists())

    def test_email_failure_is_swallowed(self) -> None:
        booking = self._book_at(self._hour_from_now(48))

        with mock.patch("apps.notifications.services.send_mail", side_effect=ConnectionError("smtp down")):
            handlers.send_confirmation_email(BookingConfirmed(booking_id=booking.id, user_id=self.player.pk))

        self.assertEqual(len(mail.outbox), 0)

    def test_requester_changes_are_not_notified(self) -> None:
        booking = self._book_at(self._hour_from_now(48))
        event = BookingStatusChanged(
            booking_id=booking.id,
            user_id=self.player.pk,
            old_status=Booking.Status.CONFIRMED,
            new_status=Booking.Status.CANCELLED,
            changed_by="user",
            notify_requester=False,
        )

        handlers.notify_requester_of_status_change(event)

        self.assertFalse(Notification.objects.exists())

    def test_booking_summary(self) -> None:
        booking = self._book_at(self._hour_from_now(48), hours=2)

        summary = handlers.booking_summary(booking)

        self.assertEqual(summary["resource_name"], "Lekki Turf")
        self.assertEqual(summary["sport"], "Football")
        self.assertEqual(summary["duration_hours"], "2")
        self.assertEqual(summary["total_amount"], "43,000.00")
        self.assertEqual(summary["currency"], "NGN")
