"""API views for booking conversations."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.roles import resolve_actor_role

from .serializers import ConversationSerializer
from .services import conversations_for_actor, get_conversation_for_booking


class ConversationViewSet(viewsets.ReadOnlyModelViewSet):
    """Conversations of the authenticated user (as player, coach or facility owner)."""

    serializer_class = ConversationSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "conversation_type"]

    def get_queryset(self):  # type: ignore
        return conversations_for_actor(resolve_actor_role(self.request.user))

    @action(detail=True, methods=["post"])
    def mark_read(self, request, pk=None):  # type: ignore
        conversation = self.get_object()
        conversation.mark_as_read()
        return Response({"status": "read"}, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path=r"by-booking/(?P<booking_id>[^/.]+)")
    def by_booking(self, request, booking_id=None):  # type: ignore
        chat_with = request.query_params.get("chat_with", "")
        conversation = get_conversation_for_booking(booking_id, chat_with, resolve_actor_role(request.user))
        return Response(self.get_serializer(conversation).data)
