"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "booking_type",
        "facility",
        "coach",
        "sport",
        "status",
        "payment_status",
        "start_time",
        "end_time",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "booking_type", "sport")
    search_fields = ("id", "user__email", "facility__name", "coach__user__email")
    date_hierarchy = "start_time"
    readonly_fields = (
        "id",
        "subtotal",
        "service_fee",
        "total_amount",
        "cancelled_by",
        "cancelled_at",
        "reminder_sent_at",
        "created_at",
        "updated_at",
    )
