"""Lookups into the provider directory and pricing catalog.

Every finder returns ``None`` for an unknown or malformed id so that the
booking engine decides which error to raise.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore

from .models import Coach, Facility, SessionPackage, Sport


def _find(queryset, pk):
    if pk in (None, ""):
        return None
    try:
        return queryset.filter(pk=pk).first()
    except (ValueError, TypeError, ValidationError):
        return None


def find_sport(sport_id) -> Sport | None:
    return _find(Sport.objects.all(), sport_id)


def find_facility(facility_id) -> Facility | None:
    return _find(Facility.objects.select_related("owner"), facility_id)


def find_coach(coach_id) -> Coach | None:
    return _find(Coach.objects.select_related("user"), coach_id)


def find_package(package_id) -> SessionPackage | None:
    return _find(SessionPackage.objects.all(), package_id)
