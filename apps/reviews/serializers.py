"""Serializers for reviews.

The creating user is inferred from the request in the view; the booking
and target checks are done by ``apps.reviews.services``.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Review


class ReviewCreateSerializer(serializers.Serializer):
    """Input for reviewing the facility or coach of a completed booking."""

    booking = serializers.UUIDField()
    target = serializers.ChoiceField(choices=Review.Target.choices)
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_rating(self, value: int) -> int:  # type: ignore
        if value < 1 or value > 5:
            raise serializers.ValidationError('Rating must be between 1 and 5.')
        return value


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews including related names."""

    user_id = serializers.ReadOnlyField(source='user.id')
    user_name = serializers.ReadOnlyField(source='user.display_name')
    booking_id = serializers.ReadOnlyField(source='booking.id')
    target = serializers.ReadOnlyField()
    facility_name = serializers.ReadOnlyField(source='facility.name', default=None)
    coach_name = serializers.ReadOnlyField(source='coach.full_name', default=None)

    class Meta:
        model = Review
        fields = [
            'id',
            'user_id',
            'user_name',
            'booking_id',
            'target',
            'facility',
            'facility_name',
            'coach',
            'coach_name',
            'rating',
            'comment',
            'provider_response',
            'provider_response_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProviderResponseSerializer(serializers.Serializer):
    """The provider's answer to a review."""

    provider_response = serializers.CharField(max_length=2000)
