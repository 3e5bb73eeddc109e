"""Admin registration for conversations."""

from __future__ import annotations

from django.contrib import admin

from .models import Conversation


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "conversation_type", "user", "status", "last_message_at", "created_at")
    list_filter = ("conversation_type", "status")
    search_fields = ("external_room_id", "user__email", "booking__id")
    readonly_fields = ("external_room_id", "participants", "metadata", "created_at", "updated_at")
