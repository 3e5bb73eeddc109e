"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging
from datetime import timedelta

from celery import shared_task  # type: ignore
from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore

from apps.users.roles import ActorRole
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import DomainError

from .handlers import booking_summary
from .models import Booking
from .services import update_status

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (run by Celery Beat)
# ============================================================================

@shared_task(name="bookings.send_upcoming_booking_reminders")
def send_upcoming_booking_reminders() -> dict[str, int]:
    """
    Remind players of confirmed sessions starting within the next 24 hours.

    Each booking is reminded once; ``reminder_sent_at`` marks it.

    Returns:
        dict: {"sent": number of reminders sent}
    """
    from apps.notifications.models import Notification
    from apps.notifications.services import create_in_app_notification, send_booking_reminder_email

    now = timezone.now()
    sent_count = 0

    upcoming_bookings = Booking.objects.filter(
        status=Booking.Status.CONFIRMED,
        start_time__gt=now,
        start_time__lte=now + timedelta(hours=24),
        reminder_sent_at__isnull=True,
    ).select_related("user", "facility", "coach", "coach__user", "sport")

    for booking in upcoming_bookings:
        summary = booking_summary(booking)
        create_in_app_notification(
            booking.user,
            type=Notification.Type.BOOKING_REMINDER,
            title="Upcoming session",
            message=f"{summary['resource_name']} on {summary['date']} at {summary['time_range']}",
            data={"booking_id": summary["booking_id"]},
        )
        send_booking_reminder_email(booking.user.email, booking.user.display_name, summary)

        booking.reminder_sent_at = now
        booking.save(update_fields=["reminder_sent_at"])
        sent_count += 1
        logger.info(f"Sent reminder for booking {booking.id}")

    if sent_count > 0:
        logger.info(f"Sent {sent_count} booking reminders")

    return {"sent": sent_count}


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Mark confirmed bookings as completed once their session is over.

    A booking is completed ``BOOKING_AUTO_COMPLETE_HOURS`` after its end
    time. The change goes through the booking engine so the usual status
    notification is sent.

    Returns:
        dict: {"completed": number of completed bookings}
    """
    cutoff = timezone.now() - timedelta(hours=settings.BOOKING_AUTO_COMPLETE_HOURS)
    completed_count = 0
    system = ActorRole.system()

    booking_ids = list(
        Booking.objects.filter(
            status=Booking.Status.CONFIRMED,
            end_time__lte=cutoff,
        ).values_list("id", flat=True)
    )

    for booking_id in booking_ids:
        try:
            with DjangoUnitOfWork() as uow:
                outcome = update_status(booking_id, Booking.Status.COMPLETED, system)
                uow.collect_events(outcome.events)
        except DomainError as e:
            # changed by someone else since the query
            logger.warning(f"Skipping completion of booking {booking_id}: {e.message}")
            continue

        completed_count += 1
        logger.info(f"Booking {booking_id} completed")

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}
