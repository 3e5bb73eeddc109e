"""Payment event handlers."""

import logging

from shared.application.message_bus import MessageBus, message_bus

from .events import PaymentConfirmed

logger = logging.getLogger(__name__)


def notify_payment_successful(event: PaymentConfirmed) -> None:
    from apps.notifications.models import Notification
    from apps.notifications.services import create_in_app_notification
    from apps.users.models import User

    user = User.objects.get(pk=event.user_id)
    create_in_app_notification(
        user,
        type=Notification.Type.PAYMENT_SUCCESSFUL,
        title="Payment received",
        message=f"We received your payment of {event.currency} {event.amount}.",
        data={"booking_id": str(event.booking_id), "payment_id": str(event.payment_id)},
    )


def record_coach_earning(event: PaymentConfirmed) -> None:
    from .models import Payment
    from .services import record_coach_earning as record

    payment = Payment.objects.select_related("booking").get(pk=event.payment_id)
    record(payment)


def register_handlers(bus: MessageBus = message_bus) -> None:
    bus.register_event_handler(PaymentConfirmed, notify_payment_successful)
    bus.register_event_handler(PaymentConfirmed, record_coach_earning)
