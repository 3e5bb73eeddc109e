"""Notification model.

In-app notifications shown in the user's inbox. They are created by
event handlers and periodic tasks (booking updates, reminders, payment
results, new reviews) and can be marked as read by the recipient.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Notification(models.Model):
    """A message sent to a user about some event."""

    class Type(models.TextChoices):
        BOOKING_PENDING = 'booking_pending', _('Booking pending')
        BOOKING_CONFIRMED = 'booking_confirmed', _('Booking confirmed')
        BOOKING_CANCELLED = 'booking_cancelled', _('Booking cancelled')
        BOOKING_COMPLETED = 'booking_completed', _('Booking completed')
        BOOKING_NO_SHOW = 'booking_no_show', _('Booking no-show')
        BOOKING_REMINDER = 'booking_reminder', _('Booking reminder')
        PAYMENT_SUCCESSFUL = 'payment_successful', _('Payment successful')
        PAYMENT_FAILED = 'payment_failed', _('Payment failed')
        REVIEW_RECEIVED = 'review_received', _('Review received')
        SYSTEM_ANNOUNCEMENT = 'system_announcement', _('System announcement')

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='notifications'
    )
    type = models.CharField(max_length=32, choices=Type.choices)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['user', 'is_read'])]

    def __str__(self) -> str:
        return f"Notification to {self.user_id}: {self.title}"

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=['is_read', 'read_at'])
