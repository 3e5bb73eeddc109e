"""Serializers for chat conversations."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Conversation


class ConversationSerializer(serializers.ModelSerializer):
    booking_id = serializers.ReadOnlyField(source="booking.id")
    chat_with = serializers.ReadOnlyField()

    class Meta:
        model = Conversation
        fields = [
            "id",
            "booking_id",
            "conversation_type",
            "chat_with",
            "external_room_id",
            "user",
            "coach",
            "facility",
            "participants",
            "status",
            "last_message_at",
            "last_message_preview",
            "unread_count",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields
