"""
Booking event handlers

Side effects of booking changes. They run after the booking transaction
has committed; the message bus logs and swallows their failures, and the
notification services themselves never raise.
"""

import logging

from django.utils import timezone

from shared.application.message_bus import MessageBus, message_bus

from .domain.events import BookingConfirmed, BookingStatusChanged
from .models import Booking

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    Booking.Status.CONFIRMED: "Booking confirmed",
    Booking.Status.CANCELLED: "Booking cancelled",
}


def _load_booking(booking_id) -> Booking:
    return Booking.objects.select_related("user", "facility", "coach", "coach__user", "sport").get(pk=booking_id)


def booking_summary(booking: Booking) -> dict:
    """Display values for emails about a booking, in local time."""
    start = timezone.localtime(booking.start_time)
    end = timezone.localtime(booking.end_time)
    return {
        "booking_id": str(booking.id),
        "resource_name": booking.resource_name,
        "sport": booking.sport.name,
        "date": start.strftime("%A, %d %B %Y"),
        "time_range": f"{start:%H:%M} - {end:%H:%M}",
        "duration_hours": f"{booking.duration_hours.normalize():f}",
        "subtotal": f"{booking.subtotal:,.2f}",
        "service_fee": f"{booking.service_fee:,.2f}",
        "total_amount": f"{booking.total_amount:,.2f}",
        "currency": booking.currency,
    }


def send_confirmation_email(event: BookingConfirmed) -> None:
    from apps.notifications.services import send_booking_confirmation_email

    booking = _load_booking(event.booking_id)
    send_booking_confirmation_email(
        booking.user.email,
        booking.user.display_name,
        booking_summary(booking),
    )


def provision_conversations(event: BookingConfirmed) -> None:
    from apps.chat.services import ensure_conversations

    booking = _load_booking(event.booking_id)
    conversations = ensure_conversations(booking)
    logger.info(
        f"Conversations for booking {booking.id}: "
        f"coach={getattr(conversations['coach'], 'pk', None)} "
        f"facility={getattr(conversations['facility'], 'pk', None)}"
    )


def notify_requester_of_status_change(event: BookingStatusChanged) -> None:
    from apps.notifications.services import create_in_app_notification

    if not event.notify_requester:
        return

    booking = _load_booking(event.booking_id)
    create_in_app_notification(
        booking.user,
        type=f"booking_{event.new_status}",
        title="Booking Update",
        message=STATUS_MESSAGES.get(event.new_status, f"Booking updated to {event.new_status}"),
        data={"booking_id": str(booking.id), "status": event.new_status, "changed_by": event.changed_by},
    )


def register_handlers(bus: MessageBus = message_bus) -> None:
    bus.register_event_handler(BookingConfirmed, send_confirmation_email)
    bus.register_event_handler(BookingConfirmed, provision_conversations)
    bus.register_event_handler(BookingStatusChanged, notify_requester_of_status_change)
