"""Chat domain models for GameDey.

A conversation is a chat room about one booking between the player and
one counterpart (the coach or the facility). The room itself lives in an
external chat service; we keep the room id and a few fields for listing.
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Conversation(models.Model):
    """Per-booking chat room with the coach or the facility."""

    class Type(models.TextChoices):
        USER_COACH = "user_coach", _("Player and coach")
        USER_FACILITY = "user_facility", _("Player and facility")

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        ARCHIVED = "archived", _("Archived")
        CLOSED = "closed", _("Closed")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.CASCADE,
        related_name="conversations",
    )
    conversation_type = models.CharField(max_length=20, choices=Type.choices)
    external_room_id = models.CharField(
        max_length=255,
        unique=True,
        help_text=_("Room id in the external chat service"),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="conversations",
    )
    coach = models.ForeignKey(
        "providers.Coach",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
    )
    facility = models.ForeignKey(
        "providers.Facility",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="conversations",
    )
    participants = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)

    # Last message info for quick access
    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_preview = models.CharField(max_length=200, blank=True)
    unread_count = models.PositiveIntegerField(default=0)

    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Conversation")
        verbose_name_plural = _("Conversations")
        ordering = ["-last_message_at", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["booking", "conversation_type"],
                name="chat_one_conversation_per_counterpart",
            )
        ]
        indexes = [
            models.Index(fields=["user", "-last_message_at"]),
            models.Index(fields=["booking"]),
        ]

    def __str__(self) -> str:
        return f"{self.get_conversation_type_display()} for booking {self.booking_id}"

    @property
    def chat_with(self) -> str:
        return "coach" if self.conversation_type == self.Type.USER_COACH else "facility"

    def mark_as_read(self) -> None:
        if self.unread_count:
            self.unread_count = 0
            self.save(update_fields=["unread_count", "updated_at"])
