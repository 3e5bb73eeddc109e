"""Tests for the provider directory API and lookups."""

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.providers import services
from apps.providers.models import Coach, Facility, SessionPackage
from shared.testing import MarketplaceFixturesMixin


class ProviderDirectoryAPITests(MarketplaceFixturesMixin, APITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.tennis_club = Facility.objects.create(
            owner=self.owner,
            name="Ikoyi Tennis Club",
            price_per_hour=Decimal("8000.00"),
        )
        self.tennis_club.sports.add(self.other_sport)
        Facility.objects.create(
            owner=self.owner,
            name="Closed Arena",
            price_per_hour=Decimal("5000.00"),
            status=Facility.Status.MAINTENANCE,
        )

    def _names(self, response) -> list:
        return [item["name"] for item in response.data]

    def test_facilities_are_public_and_hide_inactive(self) -> None:
        response = self.client.get(reverse("facility-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self._names(response), ["Ikoyi Tennis Club", "Lekki Turf"])

    def test_filter_facilities_by_sport(self) -> None:
        response = self.client.get(reverse("facility-list"), {"sport": self.sport.pk})

        self.assertEqual(self._names(response), ["Lekki Turf"])
        self.assertEqual(response.data[0]["sports"][0]["name"], "Football")

    def test_filter_facilities_by_price(self) -> None:
        response = self.client.get(reverse("facility-list"), {"price_max": "10000"})

        self.assertEqual(self._names(response), ["Ikoyi Tennis Club"])

    def test_inactive_facility_detail_is_hidden(self) -> None:
        closed = Facility.objects.get(name="Closed Arena")

        response = self.client.get(reverse("facility-detail", args=[closed.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_coaches_list(self) -> None:
        response = self.client.get(reverse("coach-list"), {"sport": self.sport.pk})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["full_name"], "Tunde Coach")
        self.assertEqual(response.data[0]["hourly_rate"], "15000.00")

    def test_suspended_coach_is_hidden(self) -> None:
        Coach.objects.filter(pk=self.coach.pk).update(status=Coach.Status.SUSPENDED)

        response = self.client.get(reverse("coach-list"))

        self.assertEqual(response.data, [])

    def test_sports_search(self) -> None:
        response = self.client.get(reverse("sport-list"), {"name": "foot"})

        self.assertEqual(self._names(response), ["Football"])

    def test_package_total_price_defaults_to_sessions_times_price(self) -> None:
        SessionPackage.objects.create(
            sport=self.sport,
            coach=self.coach,
            name="Striker clinic",
            number_of_sessions=4,
            price_per_session=Decimal("12000.00"),
        )

        response = self.client.get(reverse("package-list"), {"coach": self.coach.pk})

        self.assertEqual(response.data[0]["total_price"], "48000.00")


class ProviderLookupTests(MarketplaceFixturesMixin, TestCase):
    def test_finders_return_none_for_unknown_or_malformed_ids(self) -> None:
        self.assertIsNone(services.find_sport(None))
        self.assertIsNone(services.find_sport(""))
        self.assertIsNone(services.find_facility("abc"))
        self.assertIsNone(services.find_coach(999999))
        self.assertIsNone(services.find_package(999999))

    def test_finders_return_instances(self) -> None:
        self.assertEqual(services.find_sport(self.sport.pk), self.sport)
        self.assertEqual(services.find_facility(str(self.facility.pk)), self.facility)
        self.assertEqual(services.find_coach(self.coach.pk), self.coach)

    def test_offers(self) -> None:
        self.assertTrue(self.facility.offers(self.sport))
        self.assertFalse(self.facility.offers(self.other_sport))
        self.assertTrue(self.coach.offers(self.sport))
