"""Notification services for sending emails and in-app notifications.

Every function here is best effort: it returns ``False`` and logs the
error instead of raising, so callers never fail because a notification
could not be delivered.
"""

from __future__ import annotations

import logging
from html import unescape
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    message: str = "",
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send a single email.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        message: Plain-text body; derived from ``html_message`` when empty
        html_message: HTML body (optional)

    Returns:
        bool: True if the email was handed to the mail backend
    """
    try:
        text_message = message or (unescape(strip_tags(html_message)) if html_message else "")

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _escaped(recipient_name: str, summary: dict) -> tuple[str, dict]:
    # profile and facility names are user supplied
    return escape(recipient_name), {key: escape(value) for key, value in summary.items()}


def send_booking_confirmation_email(recipient_email: str, recipient_name: str, summary: dict) -> bool:
    """
    Booking confirmation for the requester.

    ``summary`` carries the display values prepared by the booking app:
    resource_name, date, time_range, duration_hours, subtotal, service_fee,
    total_amount, currency and booking_id.
    """
    subject = f"Booking confirmed: {summary['resource_name']}"
    name, summary = _escaped(recipient_name, summary)

    html_message = f"""
    <html>
    <body>
        <h2>Hello {name}!</h2>
        <p>Your booking has been confirmed.</p>

        <h3>Booking details:</h3>
        <ul>
            <li><strong>Booked:</strong> {summary['resource_name']}</li>
            <li><strong>Date:</strong> {summary['date']}</li>
            <li><strong>Time:</strong> {summary['time_range']}</li>
            <li><strong>Duration:</strong> {summary['duration_hours']} hour(s)</li>
            <li><strong>Subtotal:</strong> {summary['currency']} {summary['subtotal']}</li>
            <li><strong>Service fee:</strong> {summary['currency']} {summary['service_fee']}</li>
            <li><strong>Total:</strong> {summary['currency']} {summary['total_amount']}</li>
        </ul>

        <p>Booking reference: {summary['booking_id']}</p>

        <p>See you on the pitch!<br>The GameDey team</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=recipient_email,
        subject=subject,
        html_message=html_message,
    )


def send_booking_reminder_email(recipient_email: str, recipient_name: str, summary: dict) -> bool:
    """Reminder sent within 24 hours of the session."""
    subject = f"Reminder: {summary['resource_name']} on {summary['date']}"
    name, summary = _escaped(recipient_name, summary)

    html_message = f"""
    <html>
    <body>
        <h2>Hello {name}!</h2>
        <p>This is a reminder of your upcoming session.</p>
        <ul>
            <li><strong>Booked:</strong> {summary['resource_name']}</li>
            <li><strong>Date:</strong> {summary['date']}</li>
            <li><strong>Time:</strong> {summary['time_range']}</li>
        </ul>
        <p>The GameDey team</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=recipient_email,
        subject=subject,
        html_message=html_message,
    )


# ============================================================================
# IN-APP NOTIFICATIONS
# ============================================================================

def create_in_app_notification(
    user: "CustomUser",
    type: str,
    title: str,
    message: str,
    data: dict | None = None,
) -> bool:
    """
    Create an in-app notification.

    Args:
        user: Recipient
        type: One of ``Notification.Type``
        title: Notification title
        message: Notification text
        data: Extra payload for the client (booking id etc.)

    Returns:
        bool: True if the notification was stored
    """
    try:
        from .models import Notification

        Notification.objects.create(
            user=user,
            type=type,
            title=title,
            message=message,
            data=data or {},
        )

        logger.info(f"In-app notification created for {user.email}: {title}")
        return True

    except Exception as e:
        logger.error(f"Failed to create in-app notification for {user.email}: {e}", exc_info=True)
        return False
