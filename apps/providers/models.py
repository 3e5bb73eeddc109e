"""Provider directory and pricing catalog models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Sport(models.Model):
    """A sport that facilities and coaches can offer."""

    class Category(models.TextChoices):
        TEAM = "team", _("Team")
        INDIVIDUAL = "individual", _("Individual")
        RACQUET = "racquet", _("Racquet")
        WATER = "water", _("Water")
        COMBAT = "combat", _("Combat")
        FITNESS = "fitness", _("Fitness")
        OTHER = "other", _("Other")

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.OTHER)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Sport")
        verbose_name_plural = _("Sports")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ProviderQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status="active")


class Facility(models.Model):
    """A bookable venue owned by a user."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")
        MAINTENANCE = "maintenance", _("Under maintenance")
        SUSPENDED = "suspended", _("Suspended")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="facilities",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    address = models.CharField(max_length=255, blank=True)
    price_per_hour = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    capacity = models.PositiveIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    sports = models.ManyToManyField(Sport, related_name="facilities", blank=True)
    average_rating = models.DecimalField(max_digits=3, decimal_places=1, default=Decimal("0.0"))
    total_reviews = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProviderQuerySet.as_manager()

    class Meta:
        verbose_name = _("Facility")
        verbose_name_plural = _("Facilities")
        ordering = ["name"]
        indexes = [models.Index(fields=["status"])]

    def __str__(self) -> str:
        return self.name

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    def offers(self, sport) -> bool:
        return self.sports.filter(pk=sport.pk).exists()


class Coach(models.Model):
    """Coach profile attached to a user account."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")
        SUSPENDED = "suspended", _("Suspended")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="coach_profile",
    )
    bio = models.TextField(blank=True)
    experience_years = models.PositiveSmallIntegerField(default=0)
    hourly_rate = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    sports = models.ManyToManyField(Sport, related_name="coaches", blank=True)
    average_rating = models.DecimalField(max_digits=3, decimal_places=1, default=Decimal("0.0"))
    total_reviews = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProviderQuerySet.as_manager()

    class Meta:
        verbose_name = _("Coach")
        verbose_name_plural = _("Coaches")
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["status"])]

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.user.first_name} {self.user.last_name}".strip() or self.user.email

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    def offers(self, sport) -> bool:
        return self.sports.filter(pk=sport.pk).exists()


class SessionPackage(models.Model):
    """Pre-priced bundle of sessions; overrides hourly pricing when booked."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")

    sport = models.ForeignKey(Sport, on_delete=models.CASCADE, related_name="packages")
    coach = models.ForeignKey(
        Coach,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="packages",
    )
    facility = models.ForeignKey(
        Facility,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="packages",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    number_of_sessions = models.PositiveSmallIntegerField(default=1)
    price_per_session = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Session package")
        verbose_name_plural = _("Session packages")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.number_of_sessions} sessions)"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    def applies_to(self, sport, facility=None, coach=None) -> bool:
        """True when the package is for ``sport`` and sold by the booked coach or facility."""
        if self.sport_id != sport.pk:
            return False
        if coach is not None and self.coach_id == coach.pk:
            return True
        return facility is not None and self.facility_id == facility.pk

    def save(self, *args, **kwargs):
        if not self.total_price:
            self.total_price = self.price_per_session * self.number_of_sessions
        super().save(*args, **kwargs)
