"""FilterSet definitions for provider listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Coach, Facility, SessionPackage, Sport


class SportFilterSet(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = Sport
        fields = ["category", "status"]


class FacilityFilterSet(django_filters.FilterSet):
    """Search facilities by name, sport and hourly price."""

    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    sport = django_filters.NumberFilter(field_name="sports__id", lookup_expr="exact", distinct=True)
    price_min = django_filters.NumberFilter(field_name="price_per_hour", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_hour", lookup_expr="lte")
    min_rating = django_filters.NumberFilter(field_name="average_rating", lookup_expr="gte")

    class Meta:
        model = Facility
        fields = ["status", "owner"]


class CoachFilterSet(django_filters.FilterSet):
    sport = django_filters.NumberFilter(field_name="sports__id", lookup_expr="exact", distinct=True)
    rate_min = django_filters.NumberFilter(field_name="hourly_rate", lookup_expr="gte")
    rate_max = django_filters.NumberFilter(field_name="hourly_rate", lookup_expr="lte")
    min_experience = django_filters.NumberFilter(field_name="experience_years", lookup_expr="gte")

    class Meta:
        model = Coach
        fields = ["status"]


class SessionPackageFilterSet(django_filters.FilterSet):
    class Meta:
        model = SessionPackage
        fields = ["sport", "coach", "facility", "status"]
