"""
Message Bus

Routes domain events to the side-effect owners (notifications, chat,
payments, reviews) so that the booking engine never imports them.
Each app registers its handlers from ``AppConfig.ready``.
"""

from typing import Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    In-process event dispatcher

    Handlers for an event type run in registration order. A handler that
    raises is logged with its traceback and skipped; the remaining handlers
    still run and the publisher never sees the error.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; subscribing twice is a no-op."""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Registered {handler.__name__} for {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: Iterable[DomainEvent]):
        for event in events:
            handlers = self._event_handlers.get(type(event))
            if not handlers:
                logger.warning(f"No handlers registered for {event.event_type}")
                continue

            logger.info(f"Publishing {event.event_type} {event.event_id}", extra={"domain_event": event.to_dict()})
            for handler in handlers:
                self._dispatch(handler, event)

    def _dispatch(self, handler: EventHandler, event: DomainEvent):
        try:
            handler(event)
        except Exception as e:
            logger.error(
                f"Handler {handler.__name__} failed for {event.event_type} {event.event_id}: {e}",
                exc_info=True,
            )


# Global message bus instance
message_bus = MessageBus()
