"""Chat room providers.

The booking conversations live in an external chat service. The provider
used is selected with the ``CHAT_ROOM_PROVIDER`` setting (a dotted path);
development and tests use :class:`LocalChatRoomProvider`.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import requests
from django.conf import settings  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

logger = logging.getLogger(__name__)


class ChatRoomError(Exception):
    """Raised when the chat service cannot create a room."""


class BaseChatRoomProvider:
    def create_room(
        self,
        *,
        name: str,
        participants: list[dict[str, Any]],
        metadata: dict[str, Any],
        room_type: str = "direct",
    ) -> str:
        """Create a room and return its id."""
        raise NotImplementedError


class HttpChatRoomProvider(BaseChatRoomProvider):
    """Client for the external chat service REST API."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: int = 10):
        self.base_url = (base_url or settings.CHAT_API_URL).rstrip("/")
        self.api_key = api_key or settings.CHAT_API_KEY
        self.timeout = timeout

    def create_room(self, *, name, participants, metadata, room_type="direct") -> str:
        payload = {
            "name": name,
            "type": room_type,
            "participants": participants,
            "metadata": metadata,
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
        }
        try:
            response = requests.post(
                f"{self.base_url}/api/external-chat/rooms",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            room_id = response.json()["room"]["id"]
        except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
            logger.error(f"Error creating chat room '{name}': {exc}")
            raise ChatRoomError("Failed to create chat room") from exc

        logger.info(f"Chat room {room_id} created for booking {metadata.get('bookingId')}")
        return str(room_id)


class LocalChatRoomProvider(BaseChatRoomProvider):
    """Generates room ids locally; used in development and tests."""

    def create_room(self, *, name, participants, metadata, room_type="direct") -> str:
        room_id = f"local-{uuid.uuid4().hex}"
        logger.info(f"[CHAT] Local room {room_id} created: {name}")
        return room_id


def get_chat_room_provider() -> BaseChatRoomProvider:
    provider_class = import_string(settings.CHAT_ROOM_PROVIDER)
    return provider_class()
