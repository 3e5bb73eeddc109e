"""Booking domain models for GameDey."""

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeRange

CANCELLATION_CUTOFF = timedelta(hours=24)


class BookingQuerySet(models.QuerySet):
    def active(self):
        """Bookings that hold their time slot (pending or confirmed)."""
        return self.filter(status__in=Booking.BLOCKING_STATUSES)

    def for_resources(self, facility=None, coach=None):
        """Bookings on the facility OR the coach; nothing if neither is given."""
        condition = Q()
        if facility is not None:
            condition |= Q(facility=facility)
        if coach is not None:
            condition |= Q(coach=coach)
        if not condition:
            return self.none()
        return self.filter(condition)

    def overlapping(self, start, end):
        # end is exclusive: back-to-back bookings do not overlap
        return self.filter(Q(start_time__lt=end) & Q(end_time__gt=start))


class Booking(models.Model):
    """A reservation of a facility, a coach or both for one time interval."""

    class Kind(models.TextChoices):
        FACILITY = "facility", _("Facility")
        COACH = "coach", _("Coach")
        BOTH = "both", _("Facility with coach")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")
        NO_SHOW = "no_show", _("No show")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        REFUNDED = "refunded", _("Refunded")
        FAILED = "failed", _("Failed")

    class CancelledBy(models.TextChoices):
        USER = "user", _("User")
        COACH = "coach", _("Coach")
        FACILITY = "facility", _("Facility")
        ADMIN = "admin", _("Administrator")

    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED)
    FINAL_STATUSES = (Status.CANCELLED, Status.COMPLETED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    facility = models.ForeignKey(
        "providers.Facility",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    coach = models.ForeignKey(
        "providers.Coach",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    sport = models.ForeignKey(
        "providers.Sport",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    package = models.ForeignKey(
        "providers.SessionPackage",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    booking_type = models.CharField(max_length=10, choices=Kind.choices)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    service_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="NGN")
    participants_count = models.PositiveSmallIntegerField(default=1)
    notes = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    cancellation_reason = models.TextField(blank=True)
    cancelled_by = models.CharField(max_length=10, choices=CancelledBy.choices, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    reminder_sent_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_end_after_start",
            ),
            models.CheckConstraint(
                condition=models.Q(facility__isnull=False) | models.Q(coach__isnull=False),
                name="booking_has_resource",
            ),
            models.CheckConstraint(
                condition=models.Q(participants_count__gte=1),
                name="booking_participants_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["facility", "start_time", "end_time"]),
            models.Index(fields=["coach", "start_time", "end_time"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        return f"Booking {self.id} ({self.booking_type}, {self.status})"

    @property
    def period(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)

    @property
    def duration_hours(self) -> Decimal:
        return self.period.duration_hours

    @property
    def is_final(self) -> bool:
        return self.status in self.FINAL_STATUSES

    @property
    def resource_name(self) -> str:
        """Human-readable name of what was booked."""
        if self.facility_id and self.coach_id:
            return "Facility with Coach"
        if self.facility_id:
            return self.facility.name
        if self.coach_id:
            return self.coach.full_name
        return ""

    def can_be_cancelled(self, now=None) -> bool:
        """At least 24 hours before start, and not already cancelled or completed."""
        now = now or timezone.now()
        return self.start_time - now >= CANCELLATION_CUTOFF and not self.is_final
