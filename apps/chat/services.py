"""Conversation provisioning for bookings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional

from django.core.exceptions import ValidationError  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q  # type: ignore

from shared.domain.exceptions import InvalidArgument, NotFound, PermissionDenied

from .models import Conversation
from .providers import get_chat_room_provider

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.users.roles import ActorRole

logger = logging.getLogger(__name__)

CHAT_WITH_TYPES = {
    "coach": Conversation.Type.USER_COACH,
    "facility": Conversation.Type.USER_FACILITY,
}


def _player_participant(booking: "Booking") -> dict:
    user = booking.user
    return {
        "userId": str(user.pk),
        "userName": f"{user.first_name} {user.last_name}".strip() or user.email,
        "userType": "user",
    }


def _counterpart(booking: "Booking", chat_with: str) -> tuple[str, dict]:
    if chat_with == "coach":
        coach = booking.coach
        return f"Chat with Coach {coach.user.first_name or coach.full_name}", {
            "userId": str(coach.pk),
            "userName": coach.full_name,
            "userType": "coach",
        }
    facility = booking.facility
    return f"Chat with {facility.name}", {
        "userId": str(facility.pk),
        "userName": facility.name,
        "userType": "facility",
    }


def _create_conversation(booking: "Booking", chat_with: str) -> Conversation:
    name, counterpart = _counterpart(booking, chat_with)
    participants = [_player_participant(booking), counterpart]
    metadata = {
        "bookingId": str(booking.pk),
        "chatWith": chat_with,
        "startTime": booking.start_time.isoformat(),
        "endTime": booking.end_time.isoformat(),
    }

    room_id = get_chat_room_provider().create_room(
        name=name,
        participants=participants,
        metadata={**metadata, "platform": "gamedey"},
    )

    try:
        with transaction.atomic():
            conversation = Conversation.objects.create(
                booking=booking,
                conversation_type=CHAT_WITH_TYPES[chat_with],
                external_room_id=room_id,
                user=booking.user,
                coach=booking.coach if chat_with == "coach" else None,
                facility=booking.facility if chat_with == "facility" else None,
                participants=participants,
                metadata=metadata,
            )
    except IntegrityError:
        # provisioned concurrently; keep the first one
        existing = Conversation.objects.get(booking=booking, conversation_type=CHAT_WITH_TYPES[chat_with])
        logger.warning(
            f"Conversation {chat_with} for booking {booking.pk} already exists as {existing.pk}, "
            f"reusing it; external room {room_id} is orphaned"
        )
        return existing

    logger.info(f"Conversation {conversation.pk} ({chat_with}) created for booking {booking.pk}")
    return conversation


def ensure_conversations(booking: "Booking") -> Dict[str, Optional[Conversation]]:
    """
    Make sure the booking has a conversation with each booked counterpart.

    Idempotent: conversations that already exist are returned as-is, so
    calling it twice yields the same conversation ids.

    Returns:
        dict: ``{"coach": Conversation | None, "facility": Conversation | None}``
    """
    results: Dict[str, Optional[Conversation]] = {"coach": None, "facility": None}

    for conversation in Conversation.objects.filter(booking=booking):
        results[conversation.chat_with] = conversation

    if booking.coach_id and results["coach"] is None:
        results["coach"] = _create_conversation(booking, "coach")
    if booking.facility_id and results["facility"] is None:
        results["facility"] = _create_conversation(booking, "facility")

    return results


def conversations_for_actor(actor: "ActorRole"):
    """Conversations the actor takes part in, newest first."""
    queryset = Conversation.objects.select_related("booking", "coach", "facility")
    if actor.is_admin:
        return queryset
    condition = Q(user=actor.user)
    if actor.coach is not None:
        condition |= Q(coach=actor.coach)
    if actor.facility_ids:
        condition |= Q(facility_id__in=actor.facility_ids)
    return queryset.filter(condition)


def get_conversation_for_booking(booking_id, chat_with: str, actor: "ActorRole") -> Conversation:
    """Conversation about a booking, provisioned on demand for confirmed bookings."""
    from apps.bookings.models import Booking

    if chat_with not in CHAT_WITH_TYPES:
        raise InvalidArgument("chat_with must be 'coach' or 'facility'", target="chatWith")

    try:
        booking = (
            Booking.objects.select_related("user", "coach", "coach__user", "facility")
            .filter(pk=booking_id)
            .first()
        )
    except ValidationError:
        booking = None
    if booking is None:
        raise NotFound("Booking not found", target="booking")
    if actor.relation_to(booking) is None:
        raise PermissionDenied("Access denied", target="booking")

    conversation = Conversation.objects.filter(
        booking=booking, conversation_type=CHAT_WITH_TYPES[chat_with]
    ).first()
    if conversation is None and booking.status == Booking.Status.CONFIRMED:
        conversation = ensure_conversations(booking)[chat_with]
    if conversation is None:
        raise NotFound("Conversation not found for this booking", target="conversation")
    return conversation
