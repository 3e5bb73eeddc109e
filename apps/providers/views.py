"""Read-only API for sports, facilities, coaches and packages."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore

from .filters import CoachFilterSet, FacilityFilterSet, SessionPackageFilterSet, SportFilterSet
from .models import Coach, Facility, SessionPackage, Sport
from .serializers import CoachSerializer, FacilitySerializer, SessionPackageSerializer, SportSerializer


class SportViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Sport.objects.filter(status=Sport.Status.ACTIVE)
    serializer_class = SportSerializer
    filterset_class = SportFilterSet
    permission_classes = [permissions.AllowAny]


class FacilityViewSet(viewsets.ReadOnlyModelViewSet):
    """Active facilities; owners use the admin for management."""

    queryset = Facility.objects.active().select_related("owner").prefetch_related("sports")
    serializer_class = FacilitySerializer
    filterset_class = FacilityFilterSet
    permission_classes = [permissions.AllowAny]


class CoachViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Coach.objects.active().select_related("user").prefetch_related("sports")
    serializer_class = CoachSerializer
    filterset_class = CoachFilterSet
    permission_classes = [permissions.AllowAny]


class SessionPackageViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = SessionPackage.objects.filter(status=SessionPackage.Status.ACTIVE).select_related("sport")
    serializer_class = SessionPackageSerializer
    filterset_class = SessionPackageFilterSet
    permission_classes = [permissions.AllowAny]
