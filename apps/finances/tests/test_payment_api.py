"""Tests for payment confirmation and the payment gateways."""

from __future__ import annotations

from decimal import Decimal
from unittest import mock

import requests
from django.core import mail
from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.bookings.services import BookingRequest, create_booking
from apps.finances.gateways import GatewayVerification, PaymentGatewayError, PaystackGateway
from apps.finances.models import CoachEarning, Payment
from apps.finances.services import record_coach_earning
from apps.notifications.models import Notification
from shared.testing import MarketplaceFixturesMixin, local_dt


class FakeGateway:
    name = "fake"

    def __init__(self, verification=None, error=None):
        self.verification = verification
        self.error = error

    def verify(self, reference):
        if self.error is not None:
            raise self.error
        return self.verification


@override_settings(BOOKING_AUTO_CONFIRM=False)
class PaymentConfirmAPITests(MarketplaceFixturesMixin, APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.booking = create_booking(
            BookingRequest(
                sport_id=self.sport.pk,
                booking_type=Booking.Kind.FACILITY,
                start_time=local_dt(self.day, 10),
                end_time=local_dt(self.day, 12),
                facility_id=self.facility.pk,
            ),
            self.player,
        ).booking
        self.url = reverse("payment-confirm")
        self.client.force_authenticate(self.player)

    def _confirm(self, reference: str = "PSK-1001"):
        return self.client.post(self.url, {"booking": str(self.booking.id), "reference": reference}, format="json")

    def _with_gateway(self, gateway):
        return mock.patch("apps.finances.services.get_payment_gateway", return_value=gateway)

    def test_confirm_marks_booking_paid_and_confirmed(self) -> None:
        self.assertEqual(self.booking.status, Booking.Status.PENDING)

        with self.captureOnCommitCallbacks(execute=True):
            response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["already_paid"])
        self.assertEqual(response.data["booking"]["payment_status"], Booking.PaymentStatus.PAID)
        self.assertEqual(response.data["booking"]["status"], Booking.Status.CONFIRMED)
        self.assertEqual(response.data["payment"]["amount"], "43000.00")
        self.assertEqual(response.data["payment"]["gateway"], "local")

        payment = Payment.objects.get()
        self.assertEqual(payment.status, Payment.Status.SUCCESS)
        self.assertEqual(payment.metadata["facility_name"], "Lekki Turf")

        types = set(Notification.objects.filter(user=self.player).values_list("type", flat=True))
        self.assertIn(Notification.Type.PAYMENT_SUCCESSFUL, types)
        # confirmation email from the pending -> confirmed transition
        self.assertEqual(len(mail.outbox), 1)

    def test_already_paid_booking_is_returned_unchanged(self) -> None:
        self._confirm("PSK-1001")

        response = self._confirm("PSK-1002")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["already_paid"])
        self.assertIsNone(response.data["payment"])
        self.assertEqual(Payment.objects.count(), 1)

    def test_only_requester_can_confirm(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Payment.objects.exists())

    def test_reused_reference_is_rejected(self) -> None:
        other = create_booking(
            BookingRequest(
                sport_id=self.sport.pk,
                booking_type=Booking.Kind.FACILITY,
                start_time=local_dt(self.day, 14),
                end_time=local_dt(self.day, 15),
                facility_id=self.facility.pk,
            ),
            self.player,
        ).booking
        self._confirm("PSK-1001")

        response = self.client.post(self.url, {"booking": str(other.id), "reference": "PSK-1001"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["target"], "reference")

    def test_unknown_booking_returns_404(self) -> None:
        response = self.client.post(
            self.url,
            {"booking": "6c1c2f5e-8c55-4a55-9d4d-0a9d8a4c1c11", "reference": "PSK-1001"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_failed_gateway_status_is_rejected(self) -> None:
        gateway = FakeGateway(GatewayVerification(reference="PSK-1001", status="failed"))

        with self._with_gateway(gateway):
            response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["target"], "reference")
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, Booking.PaymentStatus.PENDING)

    def test_amount_mismatch_is_rejected(self) -> None:
        gateway = FakeGateway(GatewayVerification(reference="PSK-1001", status="success", amount=Decimal("40000")))

        with self._with_gateway(gateway):
            response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["target"], "amount")

    def test_amount_within_tolerance_is_accepted(self) -> None:
        gateway = FakeGateway(GatewayVerification(reference="PSK-1001", status="success", amount=Decimal("42999.50")))

        with self._with_gateway(gateway):
            response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["payment"]["gateway"], "fake")

    def test_unreachable_gateway_does_not_block_confirmation(self) -> None:
        gateway = FakeGateway(error=PaymentGatewayError("timeout"))

        with self._with_gateway(gateway):
            response = self._confirm()

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, Booking.PaymentStatus.PAID)

    def _coach_booking(self) -> Booking:
        return create_booking(
            BookingRequest(
                sport_id=self.sport.pk,
                booking_type=Booking.Kind.COACH,
                start_time=local_dt(self.day, 16),
                end_time=local_dt(self.day, 18),
                coach_id=self.coach.pk,
            ),
            self.player,
        ).booking

    def test_coach_booking_payment_records_earning(self) -> None:
        self.booking = self._coach_booking()

        with self.captureOnCommitCallbacks(execute=True):
            response = self._confirm("PSK-2001")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        earning = CoachEarning.objects.get()
        self.assertEqual(earning.coach, self.coach)
        self.assertEqual(earning.booking, self.booking)
        self.assertEqual(earning.payment.reference, "PSK-2001")
        self.assertEqual(earning.gross_amount, Decimal("32250.00"))
        self.assertEqual(earning.platform_fee, Decimal("3225.00"))
        self.assertEqual(earning.net_amount, Decimal("29025.00"))
        self.assertEqual(earning.status, CoachEarning.Status.PENDING)

    def test_facility_booking_payment_records_no_earning(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            self._confirm()

        self.assertFalse(CoachEarning.objects.exists())

    def test_earning_failure_does_not_block_payment(self) -> None:
        self.booking = self._coach_booking()

        with mock.patch("apps.finances.services.record_coach_earning", side_effect=RuntimeError("ledger down")):
            with self.captureOnCommitCallbacks(execute=True):
                response = self._confirm("PSK-2002")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.payment_status, Booking.PaymentStatus.PAID)
        self.assertFalse(CoachEarning.objects.exists())
        self.assertTrue(
            Notification.objects.filter(user=self.player, type=Notification.Type.PAYMENT_SUCCESSFUL).exists()
        )

    def test_recording_earning_twice_keeps_one_row(self) -> None:
        self.booking = self._coach_booking()
        self._confirm("PSK-2003")
        payment = Payment.objects.get(reference="PSK-2003")

        first = record_coach_earning(payment)
        second = record_coach_earning(payment)

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(CoachEarning.objects.count(), 1)

    def test_payments_list_shows_own_payments(self) -> None:
        self._confirm()

        response = self.client.get(reverse("payment-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        self.client.force_authenticate(self.stranger)
        response = self.client.get(reverse("payment-list"))
        self.assertEqual(len(response.data), 0)


class PaystackGatewayTests(SimpleTestCase):
    def setUp(self) -> None:
        self.gateway = PaystackGateway(api_url="https://paystack.test/", secret_key="sk_test")

    @mock.patch("apps.finances.gateways.requests.get")
    def test_verify_converts_kobo(self, mock_get) -> None:
        mock_get.return_value.json.return_value = {
            "status": True,
            "data": {"status": "success", "amount": 4300000, "currency": "NGN"},
        }

        verification = self.gateway.verify("PSK-1001")

        self.assertTrue(verification.is_successful)
        self.assertEqual(verification.amount, Decimal("43000"))
        self.assertEqual(verification.currency, "NGN")
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "https://paystack.test/transaction/verify/PSK-1001")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk_test")

    @mock.patch("apps.finances.gateways.requests.get")
    def test_transport_errors_raise_gateway_error(self, mock_get) -> None:
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(PaymentGatewayError):
            self.gateway.verify("PSK-1001")

    @mock.patch("apps.finances.gateways.requests.get")
    def test_malformed_body_raises_gateway_error(self, mock_get) -> None:
        mock_get.return_value.json.return_value = {"status": False}

        with self.assertRaises(PaymentGatewayError):
            self.gateway.verify("PSK-1001")
