"""Booking engine.

Creates bookings after validating the sport offering, the requested
resources and the time slot, prices them, and drives status changes.
The functions never call notification or chat code: they return domain
events next to the booking, and the caller publishes them after commit
(see ``shared.application.uow.DjangoUnitOfWork``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.providers.services import find_coach, find_facility, find_package, find_sport
from shared.domain.base import DomainEvent
from shared.domain.exceptions import Conflict, InvalidArgument, InvalidState, NotFound, PermissionDenied
from shared.domain.value_objects import TimeRange

from .domain.events import BookingConfirmed, BookingStatusChanged
from .domain.pricing import calculate_price
from .models import Booking

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.users.models import CustomUser
    from apps.users.roles import ActorRole

logger = logging.getLogger(__name__)


@dataclass
class BookingRequest:
    sport_id: object
    booking_type: str
    start_time: datetime
    end_time: datetime
    facility_id: object = None
    coach_id: object = None
    package_id: object = None
    participants_count: int = 1
    notes: str = ""


@dataclass
class BookingOutcome:
    """The booking after the operation plus the events to publish after commit."""

    booking: Booking
    events: List[DomainEvent] = field(default_factory=list)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _check_required_resources(booking_type: str, facility_id, coach_id) -> None:
    if booking_type == Booking.Kind.BOTH and not (facility_id and coach_id):
        raise InvalidArgument("Both facility and coach are required", target="missingResource")
    if booking_type == Booking.Kind.FACILITY and not facility_id:
        raise InvalidArgument("Facility is required for a facility booking", target="missingResource")
    if booking_type == Booking.Kind.COACH and not coach_id:
        raise InvalidArgument("Coach is required for a coach booking", target="missingResource")


def ensure_slot_is_free(period: TimeRange, facility=None, coach=None, *, exclude_booking_id=None) -> None:
    """Raise Conflict when a pending or confirmed booking on either resource overlaps ``period``.

    The query locks existing rows only; two requests for an empty slot can
    still both pass before either inserts.
    """
    bookings_qs = (
        Booking.objects.active()
        .for_resources(facility=facility, coach=coach)
        .overlapping(period.start, period.end)
    )
    if exclude_booking_id is not None:
        bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

    bookings_qs = _lock_queryset_if_possible(bookings_qs)

    if bookings_qs.exists():
        logger.info(
            f"Slot conflict for facility={getattr(facility, 'pk', None)} "
            f"coach={getattr(coach, 'pk', None)} period={period}"
        )
        raise Conflict("Time slot is not available", target="timeSlot")


def create_booking(request: BookingRequest, requester: "CustomUser") -> BookingOutcome:
    """
    Validate, price and persist a booking

    Checks run fail-fast in this order: interval, sport, booking kind,
    required resources, facility, coach, time slot, package.
    """
    if request.end_time <= request.start_time:
        raise InvalidArgument("End time must be after start time", target="endTime")
    period = TimeRange(request.start_time, request.end_time)

    sport = find_sport(request.sport_id)
    if sport is None:
        raise NotFound("Sport not found", target="sport")

    if request.booking_type not in Booking.Kind.values:
        raise InvalidArgument("Invalid booking type", target="bookingType")

    _check_required_resources(request.booking_type, request.facility_id, request.coach_id)

    facility = None
    if request.facility_id:
        facility = find_facility(request.facility_id)
        if facility is None or not facility.is_active or not facility.offers(sport):
            raise NotFound("Facility not found or does not offer this sport", target="facility")

    coach = None
    if request.coach_id:
        coach = find_coach(request.coach_id)
        if coach is None or not coach.is_active or not coach.offers(sport):
            raise NotFound("Coach not found or does not offer this sport", target="coach")

    initial_status = Booking.Status.CONFIRMED if settings.BOOKING_AUTO_CONFIRM else Booking.Status.PENDING

    with transaction.atomic():
        ensure_slot_is_free(period, facility=facility, coach=coach)

        package = None
        if request.package_id:
            package = find_package(request.package_id)
            if package is None or not package.is_active or not package.applies_to(sport, facility, coach):
                raise NotFound("Session package not found for this booking", target="package")

        price = calculate_price(
            period,
            currency=settings.BOOKING_CURRENCY,
            facility_rate=facility.price_per_hour if facility else None,
            coach_rate=coach.hourly_rate if coach else None,
            package_price=package.price_per_session if package else None,
        )

        booking = Booking.objects.create(
            user=requester,
            facility=facility,
            coach=coach,
            sport=sport,
            package=package,
            booking_type=request.booking_type,
            start_time=period.start,
            end_time=period.end,
            participants_count=request.participants_count or 1,
            notes=request.notes or "",
            status=initial_status,
            **price.as_fields(),
        )

    logger.info(
        f"Booking {booking.id} created by user {requester.pk}: {booking.booking_type} "
        f"{period} total={booking.total_amount} {booking.currency} status={booking.status}"
    )

    events: List[DomainEvent] = []
    if booking.status == Booking.Status.CONFIRMED:
        events.append(BookingConfirmed(booking_id=booking.id, user_id=booking.user_id))
    return BookingOutcome(booking=booking, events=events)


def _get_booking_for_update(booking_id) -> Booking:
    queryset = Booking.objects.select_related("user", "facility", "coach", "coach__user", "sport", "package")
    try:
        booking = _lock_queryset_if_possible(queryset.filter(pk=booking_id)).first()
    except (ValueError, TypeError, ValidationError):
        booking = None
    if booking is None:
        raise NotFound("Booking not found", target="booking")
    return booking


def _apply_status(booking: Booking, new_status: str, changed_by: str, reason: str = "") -> List[DomainEvent]:
    old_status = booking.status
    booking.status = new_status
    update_fields = ["status", "updated_at"]

    if new_status == Booking.Status.CANCELLED:
        booking.cancellation_reason = reason or ""
        booking.cancelled_by = changed_by
        booking.cancelled_at = timezone.now()
        update_fields += ["cancellation_reason", "cancelled_by", "cancelled_at"]

    booking.save(update_fields=update_fields)
    logger.info(f"Booking {booking.id} status {old_status} -> {new_status} by {changed_by}")

    events: List[DomainEvent] = []
    if new_status == Booking.Status.CONFIRMED and old_status != Booking.Status.CONFIRMED:
        events.append(BookingConfirmed(booking_id=booking.id, user_id=booking.user_id))
    events.append(
        BookingStatusChanged(
            booking_id=booking.id,
            user_id=booking.user_id,
            old_status=old_status,
            new_status=new_status,
            changed_by=changed_by,
            notify_requester=changed_by != Booking.CancelledBy.USER,
        )
    )
    return events


def update_status(booking_id, new_status: str, actor: "ActorRole", reason: str = "") -> BookingOutcome:
    """
    Change a booking's status on behalf of a stakeholder

    The requester, the coach, the facility owner and administrators may
    change the status. The 24-hour cancellation cutoff does not apply here.
    """
    if new_status not in Booking.Status.values:
        raise InvalidArgument("Invalid status", target="status")

    with transaction.atomic():
        booking = _get_booking_for_update(booking_id)

        relation = actor.relation_to(booking)
        if relation is None:
            raise PermissionDenied("Access denied", target="booking")

        if booking.is_final:
            raise InvalidState("Cannot modify completed or cancelled booking", target="status")

        events = _apply_status(booking, new_status, relation, reason)

    return BookingOutcome(booking=booking, events=events)


def cancel_booking(booking_id, actor: "ActorRole", reason: str = "") -> BookingOutcome:
    """Requester-facing cancellation; allowed until 24 hours before start."""

    with transaction.atomic():
        booking = _get_booking_for_update(booking_id)

        if not actor.is_requester(booking):
            raise PermissionDenied("Only the requester can cancel this booking", target="booking")

        if not booking.can_be_cancelled():
            raise InvalidState(
                "Booking cannot be cancelled (less than 24 hours remaining or already processed)",
                target="status",
            )

        events = _apply_status(booking, Booking.Status.CANCELLED, Booking.CancelledBy.USER, reason)

    return BookingOutcome(booking=booking, events=events)


def mark_paid(booking_id, reference: str = "") -> BookingOutcome:
    """Record a successful payment and confirm the booking."""

    with transaction.atomic():
        booking = _get_booking_for_update(booking_id)

        if booking.is_final:
            raise InvalidState("Cannot pay for a completed or cancelled booking", target="status")

        booking.payment_status = Booking.PaymentStatus.PAID
        booking.save(update_fields=["payment_status", "updated_at"])

        events: List[DomainEvent] = []
        if booking.status != Booking.Status.CONFIRMED:
            events = _apply_status(booking, Booking.Status.CONFIRMED, Booking.CancelledBy.USER)

    logger.info(f"Booking {booking.id} marked as paid (reference={reference})")
    return BookingOutcome(booking=booking, events=events)
