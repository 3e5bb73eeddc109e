"""Test helpers shared by the app test suites."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.utils import timezone  # type: ignore


def local_dt(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime at ``hour:minute`` of ``day`` in the current timezone."""
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


class MarketplaceFixturesMixin:
    """Creates a player, a facility owner, a coach and one sport they all offer."""

    def setUp(self) -> None:  # type: ignore
        from apps.providers.models import Coach, Facility, Sport
        from apps.users.models import User

        super().setUp()  # type: ignore[misc]
        self.player = User.objects.create_user(
            email="player@example.com",
            password="PlayerPass123",
            first_name="Ada",
            last_name="Player",
        )
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            first_name="Femi",
            last_name="Owner",
            role=User.RoleChoices.FACILITY_OWNER,
        )
        self.coach_user = User.objects.create_user(
            email="coach@example.com",
            password="CoachPass123",
            first_name="Tunde",
            last_name="Coach",
            role=User.RoleChoices.COACH,
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.stranger = User.objects.create_user(
            email="stranger@example.com",
            password="StrangerPass123",
        )

        self.sport = Sport.objects.create(name="Football", category=Sport.Category.TEAM)
        self.other_sport = Sport.objects.create(name="Tennis", category=Sport.Category.RACQUET)

        self.facility = Facility.objects.create(
            owner=self.owner,
            name="Lekki Turf",
            address="Admiralty Way, Lekki",
            price_per_hour=Decimal("20000.00"),
            capacity=22,
        )
        self.facility.sports.add(self.sport)

        self.coach = Coach.objects.create(
            user=self.coach_user,
            bio="UEFA B licensed",
            experience_years=8,
            hourly_rate=Decimal("15000.00"),
        )
        self.coach.sports.add(self.sport)

        self.day = timezone.localdate() + timedelta(days=7)
