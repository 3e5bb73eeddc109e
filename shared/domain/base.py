"""
Domain building blocks shared by the apps.

- ValueObject: immutable, compared by value (Money, TimeRange)
- DomainEvent: a fact returned by a service and published after commit
"""

from abc import ABC
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """Marker base for frozen dataclasses without identity."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Subclasses are ``kw_only`` dataclasses that add their payload fields and
    usually point ``aggregate_id`` at the booking, payment or review the
    event is about.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)
    aggregate_id: UUID | None = None

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Flat, JSON friendly representation used in log records."""
        payload = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, UUID):
                value = str(value)
            payload[f.name] = value
        payload['event_type'] = self.event_type
        return payload
