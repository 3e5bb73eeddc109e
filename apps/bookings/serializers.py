"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking
from .services import BookingRequest


class BookingCreateSerializer(serializers.Serializer):
    """Input of a booking request; the engine does the business validation."""

    sport = serializers.IntegerField()
    facility = serializers.IntegerField(required=False, allow_null=True)
    coach = serializers.IntegerField(required=False, allow_null=True)
    package = serializers.IntegerField(required=False, allow_null=True)
    booking_type = serializers.CharField(max_length=10)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    participants_count = serializers.IntegerField(min_value=1, default=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def to_booking_request(self) -> BookingRequest:
        data = self.validated_data
        return BookingRequest(
            sport_id=data["sport"],
            booking_type=data["booking_type"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            facility_id=data.get("facility"),
            coach_id=data.get("coach"),
            package_id=data.get("package"),
            participants_count=data["participants_count"],
            notes=data["notes"],
        )


class BookingSerializer(serializers.ModelSerializer):
    """Booking with its resources resolved for display."""

    user_id = serializers.ReadOnlyField(source="user.id")
    user_name = serializers.ReadOnlyField(source="user.display_name")
    facility_name = serializers.ReadOnlyField(source="facility.name", default=None)
    coach_name = serializers.ReadOnlyField(source="coach.full_name", default=None)
    sport_name = serializers.ReadOnlyField(source="sport.name")
    package_name = serializers.ReadOnlyField(source="package.name", default=None)
    can_be_cancelled = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "user_id",
            "user_name",
            "facility",
            "facility_name",
            "coach",
            "coach_name",
            "sport",
            "sport_name",
            "package",
            "package_name",
            "booking_type",
            "start_time",
            "end_time",
            "subtotal",
            "service_fee",
            "total_amount",
            "currency",
            "participants_count",
            "notes",
            "status",
            "payment_status",
            "cancellation_reason",
            "cancelled_by",
            "cancelled_at",
            "can_be_cancelled",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_can_be_cancelled(self, obj: Booking) -> bool:
        return obj.can_be_cancelled()


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)
    cancellation_reason = serializers.CharField(required=False, allow_blank=True, default="")


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class AvailabilityQuerySerializer(serializers.Serializer):
    facility = serializers.IntegerField(required=False)
    coach = serializers.IntegerField(required=False)


class SlotsQuerySerializer(AvailabilityQuerySerializer):
    date = serializers.DateField(required=False)
    include_unavailable = serializers.BooleanField(required=False, default=False)


class CalendarQuerySerializer(AvailabilityQuerySerializer):
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)


class DateQuerySerializer(AvailabilityQuerySerializer):
    date = serializers.DateField(required=False)
