"""Admin registration for payments."""

from __future__ import annotations

from django.contrib import admin

from .models import CoachEarning, Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("reference", "booking", "user", "amount", "currency", "gateway", "status", "paid_at")
    list_filter = ("status", "gateway")
    search_fields = ("reference", "user__email", "booking__id")
    readonly_fields = ("metadata", "paid_at", "created_at")


@admin.register(CoachEarning)
class CoachEarningAdmin(admin.ModelAdmin):
    list_display = ("coach", "booking", "gross_amount", "platform_fee", "net_amount", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("coach__user__email", "booking__id")
    readonly_fields = ("gross_amount", "platform_fee", "net_amount", "created_at")
