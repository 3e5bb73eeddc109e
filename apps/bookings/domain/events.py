"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
The booking services return them next to the booking; they are published
on the message bus after the surrounding transaction commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """
    Event: Booking reached ``confirmed`` from another status

    Triggers:
    - Send booking confirmation email to the requester
    - Provision chat conversations with the coach and/or facility
    """
    booking_id: UUID
    user_id: int

    def __post_init__(self):
        self.aggregate_id = self.booking_id


@dataclass(kw_only=True)
class BookingStatusChanged(DomainEvent):
    """
    Event: Booking status was changed by an actor

    Triggers:
    - In-app notification to the requester, unless they made the change
    """
    booking_id: UUID
    user_id: int
    old_status: str
    new_status: str
    changed_by: str
    notify_requester: bool = True

    def __post_init__(self):
        self.aggregate_id = self.booking_id
