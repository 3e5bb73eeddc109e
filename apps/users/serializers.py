"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile of the current user together with the derived marketplace role."""

    actor_kind = serializers.SerializerMethodField()
    is_admin = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "actor_kind",
            "is_admin",
            "is_email_verified",
            "created_at",
        ]
        read_only_fields = ["id", "email", "role", "is_email_verified", "created_at"]

    def _actor_role(self, obj):  # type: ignore
        role = self.context.get("actor_role")
        if role is None:
            from .roles import resolve_actor_role

            role = resolve_actor_role(obj)
            self.context["actor_role"] = role
        return role

    def get_actor_kind(self, obj) -> str:  # type: ignore
        return self._actor_role(obj).kind

    def get_is_admin(self, obj) -> bool:  # type: ignore
        return self._actor_role(obj).is_admin
