"""URL routing for the provider directory."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CoachViewSet, FacilityViewSet, SessionPackageViewSet, SportViewSet

router = DefaultRouter()
router.register(r"sports", SportViewSet, basename="sport")
router.register(r"facilities", FacilityViewSet, basename="facility")
router.register(r"coaches", CoachViewSet, basename="coach")
router.register(r"packages", SessionPackageViewSet, basename="package")

urlpatterns = [
    path("", include(router.urls)),
]
