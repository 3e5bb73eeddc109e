"""Payment confirmation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import mark_paid
from shared.domain.base import DomainEvent
from shared.domain.exceptions import Conflict, InvalidArgument, NotFound, PermissionDenied
from shared.domain.value_objects import Money

from .events import PaymentConfirmed
from .gateways import PaymentGatewayError, get_payment_gateway
from .models import CoachEarning, Payment

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.roles import ActorRole

logger = logging.getLogger(__name__)

# naira
AMOUNT_TOLERANCE = Decimal("1")


@dataclass
class PaymentOutcome:
    booking: Booking
    payment: Optional[Payment] = None
    already_paid: bool = False
    events: List[DomainEvent] = field(default_factory=list)


def _payment_metadata(booking: Booking) -> dict:
    return {
        "booking_type": booking.booking_type,
        "facility_name": booking.facility.name if booking.facility_id else None,
        "coach_name": booking.coach.full_name if booking.coach_id else None,
        "confirmed_at": timezone.now().isoformat(),
    }


def confirm_payment(booking_id, reference: str, actor: "ActorRole") -> PaymentOutcome:
    """
    Confirm a gateway payment for a booking

    Only the requester may confirm. A booking that is already paid is
    returned unchanged. The gateway is asked to verify the reference; if
    it cannot be reached the payment is accepted anyway, but an explicit
    non-success status or an amount that differs by more than one unit
    from the booking total is rejected.
    """
    if not reference:
        raise InvalidArgument("Payment reference is required", target="reference")

    try:
        booking = (
            Booking.objects.select_related("user", "facility", "coach", "coach__user")
            .filter(pk=booking_id)
            .first()
        )
    except ValidationError:
        booking = None
    if booking is None:
        raise NotFound("Booking not found", target="booking")

    if not actor.is_requester(booking):
        raise PermissionDenied("Access denied", target="booking")

    if booking.payment_status == Booking.PaymentStatus.PAID:
        logger.info(f"Booking {booking.id} already paid, ignoring reference {reference}")
        return PaymentOutcome(booking=booking, already_paid=True)

    if Payment.objects.filter(reference=reference).exists():
        raise Conflict("Payment reference has already been used", target="reference")

    gateway = get_payment_gateway()
    try:
        verification = gateway.verify(reference)
    except PaymentGatewayError:
        logger.warning(f"Gateway verification of {reference} failed, proceeding with confirmation")
        verification = None

    if verification is not None:
        if not verification.is_successful:
            raise InvalidArgument("Payment not successful according to the gateway", target="reference")
        if verification.amount is not None and abs(verification.amount - booking.total_amount) > AMOUNT_TOLERANCE:
            logger.warning(
                f"Amount mismatch for booking {booking.id}: expected {booking.total_amount}, "
                f"paid {verification.amount}"
            )
            raise InvalidArgument("Payment amount does not match booking amount", target="amount")

    with transaction.atomic():
        payment = Payment.objects.create(
            booking=booking,
            user=booking.user,
            amount=booking.total_amount,
            currency=booking.currency,
            gateway=gateway.name,
            reference=reference,
            status=Payment.Status.SUCCESS,
            metadata=_payment_metadata(booking),
            paid_at=timezone.now(),
        )
        outcome = mark_paid(booking.pk, reference)

    logger.info(f"Payment {payment.reference} confirmed for booking {booking.id}")

    events: List[DomainEvent] = list(outcome.events)
    events.append(
        PaymentConfirmed(
            payment_id=payment.id,
            booking_id=booking.id,
            user_id=booking.user_id,
            amount=f"{payment.amount:.2f}",
            currency=payment.currency,
        )
    )
    return PaymentOutcome(booking=outcome.booking, payment=payment, events=events)


def record_coach_earning(payment: Payment) -> Optional[CoachEarning]:
    """
    Book the coach's share of a paid coach session

    Only coach-only bookings earn: the platform keeps
    ``COACH_PLATFORM_FEE_RATE`` of the payment and the rest waits for
    payout. Recording twice for the same booking returns the first row.
    """
    booking = payment.booking
    if booking.booking_type != Booking.Kind.COACH or not booking.coach_id:
        return None

    gross = Money(payment.amount, payment.currency)
    fee = (gross * Decimal(str(settings.COACH_PLATFORM_FEE_RATE))).rounded()
    earning, created = CoachEarning.objects.get_or_create(
        booking=booking,
        defaults={
            "coach_id": booking.coach_id,
            "payment": payment,
            "gross_amount": gross.amount,
            "platform_fee": fee.amount,
            "net_amount": gross.amount - fee.amount,
        },
    )
    if created:
        logger.info(f"Coach {earning.coach_id} earned {earning.net_amount} {payment.currency} from booking {booking.id}")
    return earning
