"""Tests for notification services and the notifications API."""

from __future__ import annotations

from unittest import mock

from django.core import mail
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.notifications import services
from apps.notifications.models import Notification
from apps.users.models import User


class NotificationServiceTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="ada@example.com", password="AdaPass123", first_name="Ada")

    def test_send_email_uses_html_as_plain_text_fallback(self) -> None:
        sent = services.send_email_notification(
            "ada@example.com", "Hello", html_message="<p>Your <b>session</b> is booked</p>"
        )

        self.assertTrue(sent)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].body, "Your session is booked")

    def test_send_email_failure_returns_false(self) -> None:
        with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("smtp down")):
            sent = services.send_email_notification("ada@example.com", "Hello", "Body")

        self.assertFalse(sent)

    def test_booking_confirmation_email(self) -> None:
        summary = {
            "booking_id": "b-1",
            "resource_name": "Lekki Turf",
            "sport": "Football",
            "date": "Saturday, 04 May 2030",
            "time_range": "10:00 - 12:00",
            "duration_hours": "2",
            "subtotal": "40,000.00",
            "service_fee": "3,000.00",
            "total_amount": "43,000.00",
            "currency": "NGN",
        }

        self.assertTrue(services.send_booking_confirmation_email("ada@example.com", "Ada", summary))

        self.assertEqual(mail.outbox[0].subject, "Booking confirmed: Lekki Turf")
        self.assertIn("43,000.00", mail.outbox[0].body)

    def test_html_body_escapes_user_supplied_names(self) -> None:
        summary = {
            "booking_id": "b-2",
            "resource_name": "Tom & Jerry <b>Arena</b>",
            "date": "Saturday, 04 May 2030",
            "time_range": "10:00 - 12:00",
        }

        self.assertTrue(services.send_booking_reminder_email("ada@example.com", "<script>x()</script>", summary))

        html_body = mail.outbox[0].alternatives[0][0]
        self.assertIn("Hello &lt;script&gt;x()&lt;/script&gt;!", html_body)
        self.assertIn("Tom &amp; Jerry &lt;b&gt;Arena&lt;/b&gt;", html_body)
        self.assertNotIn("<script>", html_body)
        self.assertIn("Tom & Jerry <b>Arena</b>", mail.outbox[0].body)

    def test_create_in_app_notification(self) -> None:
        created = services.create_in_app_notification(
            self.user,
            type=Notification.Type.SYSTEM_ANNOUNCEMENT,
            title="Welcome",
            message="Find a pitch near you",
        )

        self.assertTrue(created)
        notification = Notification.objects.get()
        self.assertEqual(notification.data, {})
        self.assertFalse(notification.is_read)


class NotificationAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="ada@example.com", password="AdaPass123")
        self.other = User.objects.create_user(email="bola@example.com", password="BolaPass123")
        self.mine = Notification.objects.create(
            user=self.user,
            type=Notification.Type.BOOKING_CONFIRMED,
            title="Booking Update",
            message="Booking confirmed",
        )
        Notification.objects.create(
            user=self.other,
            type=Notification.Type.BOOKING_CANCELLED,
            title="Booking Update",
            message="Booking cancelled",
        )
        self.client.force_authenticate(self.user)

    def test_lists_only_own_notifications(self) -> None:
        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["id"] for n in response.data], [self.mine.pk])

    def test_filter_unread(self) -> None:
        self.mine.mark_read()

        response = self.client.get(reverse("notification-list"), {"is_read": "false"})

        self.assertEqual(response.data, [])

    def test_mark_read(self) -> None:
        response = self.client.post(reverse("notification-mark-read", args=[self.mine.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.mine.refresh_from_db()
        self.assertTrue(self.mine.is_read)
        self.assertIsNotNone(self.mine.read_at)

    def test_cannot_touch_other_users_notifications(self) -> None:
        theirs = Notification.objects.get(user=self.other)

        response = self.client.post(reverse("notification-mark-read", args=[theirs.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(reverse("notification-list"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
