"""Models for the review domain.

Defines the ``Review`` entity: a rating with an optional comment left by
a player for the facility or the coach of one of their completed
bookings. The provider may answer it once with a public response.
"""

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """A review of a facility or a coach for a completed booking."""

    class Target(models.TextChoices):
        FACILITY = 'facility', _('Facility')
        COACH = 'coach', _('Coach')

    user = models.ForeignKey(
        'users.CustomUser', on_delete=models.CASCADE, related_name='reviews'
    )
    booking = models.ForeignKey(
        'bookings.Booking', on_delete=models.CASCADE, related_name='reviews'
    )
    facility = models.ForeignKey(
        'providers.Facility',
        on_delete=models.CASCADE,
        related_name='reviews',
        null=True,
        blank=True,
    )
    coach = models.ForeignKey(
        'providers.Coach',
        on_delete=models.CASCADE,
        related_name='reviews',
        null=True,
        blank=True,
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5')
    )
    comment = models.TextField(blank=True)

    provider_response = models.TextField(blank=True)
    provider_response_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(facility__isnull=False, coach__isnull=True)
                    | models.Q(facility__isnull=True, coach__isnull=False)
                ),
                name='review_single_target',
            ),
            models.UniqueConstraint(
                fields=['user', 'booking', 'facility'],
                condition=models.Q(facility__isnull=False),
                name='review_unique_facility_per_booking',
            ),
            models.UniqueConstraint(
                fields=['user', 'booking', 'coach'],
                condition=models.Q(coach__isnull=False),
                name='review_unique_coach_per_booking',
            ),
        ]
        indexes = [
            models.Index(fields=['facility', '-created_at']),
            models.Index(fields=['coach', '-created_at']),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for {self.target} (Rating: {self.rating})"

    @property
    def target(self) -> str:
        return self.Target.FACILITY if self.facility_id else self.Target.COACH

    @property
    def reviewed(self):
        """The facility or coach under review."""
        return self.facility if self.facility_id else self.coach
