"""Serializers for the provider directory."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Coach, Facility, SessionPackage, Sport


class SportSerializer(serializers.ModelSerializer):
    class Meta:
        model = Sport
        fields = ["id", "name", "description", "category", "status"]


class FacilitySerializer(serializers.ModelSerializer):
    owner_id = serializers.ReadOnlyField(source="owner.id")
    sports = SportSerializer(many=True, read_only=True)

    class Meta:
        model = Facility
        fields = [
            "id",
            "owner_id",
            "name",
            "description",
            "address",
            "price_per_hour",
            "capacity",
            "status",
            "sports",
            "average_rating",
            "total_reviews",
        ]


class CoachSerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField(source="user.id")
    full_name = serializers.ReadOnlyField()
    sports = SportSerializer(many=True, read_only=True)

    class Meta:
        model = Coach
        fields = [
            "id",
            "user_id",
            "full_name",
            "bio",
            "experience_years",
            "hourly_rate",
            "status",
            "sports",
            "average_rating",
            "total_reviews",
        ]


class SessionPackageSerializer(serializers.ModelSerializer):
    class Meta:
        model = SessionPackage
        fields = [
            "id",
            "sport",
            "coach",
            "facility",
            "name",
            "description",
            "number_of_sessions",
            "price_per_session",
            "total_price",
            "status",
        ]
