"""Admin registration for providers."""

from __future__ import annotations

from django.contrib import admin

from .models import Coach, Facility, SessionPackage, Sport


@admin.register(Sport)
class SportAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "status", "created_at")
    list_filter = ("category", "status")
    search_fields = ("name",)


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "price_per_hour", "status", "average_rating", "total_reviews")
    list_filter = ("status", "sports")
    search_fields = ("name", "address", "owner__email")
    filter_horizontal = ("sports",)
    readonly_fields = ("average_rating", "total_reviews", "created_at", "updated_at")


@admin.register(Coach)
class CoachAdmin(admin.ModelAdmin):
    list_display = ("__str__", "hourly_rate", "experience_years", "status", "average_rating")
    list_filter = ("status", "sports")
    search_fields = ("user__email", "user__first_name", "user__last_name")
    filter_horizontal = ("sports",)
    readonly_fields = ("average_rating", "total_reviews", "created_at", "updated_at")


@admin.register(SessionPackage)
class SessionPackageAdmin(admin.ModelAdmin):
    list_display = ("name", "sport", "coach", "facility", "number_of_sessions", "price_per_session", "status")
    list_filter = ("status", "sport")
    search_fields = ("name",)
