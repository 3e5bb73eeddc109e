"""Serializers for the finance domain (payments)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = [
            "id",
            "booking",
            "amount",
            "currency",
            "gateway",
            "reference",
            "status",
            "metadata",
            "paid_at",
            "created_at",
        ]
        read_only_fields = fields


class PaymentConfirmSerializer(serializers.Serializer):
    """Booking id and the gateway reference returned to the client."""

    booking = serializers.UUIDField()
    reference = serializers.CharField(max_length=100)
