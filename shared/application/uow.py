"""
Unit of Work

Wraps a request's writes in one database transaction and holds the domain
events the services returned. Events reach the message bus only through
``transaction.on_commit``: a rolled back unit of work never publishes, and
a failing side effect can no longer undo the committed write.
"""

from typing import Iterable, List, Optional
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Transaction boundary for booking, payment and review commands

    Usage:
        with DjangoUnitOfWork() as uow:
            outcome = create_booking(request, requester)
            uow.collect_events(outcome.events)
        # handlers run once the outermost transaction commits

    ``bus`` defaults to the project-wide message bus.
    """

    def __init__(self, bus=None, using: Optional[str] = None):
        self._bus = bus
        self._using = using
        self._events: List[DomainEvent] = []
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pending, self._events = self._events, []
        if exc_type is None and pending:
            transaction.on_commit(lambda: self._publish(pending), using=self._using)
            logger.debug(f"Scheduled {len(pending)} events for publishing on commit")
        elif exc_type is not None and pending:
            logger.warning(f"Rolling back, discarding {len(pending)} events ({exc_type.__name__})")
        return self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def collect_events(self, events: Iterable[DomainEvent]) -> None:
        self._events.extend(events)

    def _publish(self, events: List[DomainEvent]) -> None:
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        bus.publish_events(events)
