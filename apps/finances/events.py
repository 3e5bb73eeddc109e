"""Payment domain events."""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class PaymentConfirmed(DomainEvent):
    """
    Event: A gateway payment for a booking was recorded

    Triggers:
    - In-app ``payment_successful`` notification to the payer
    - Coach earning for coach-only bookings
    """
    payment_id: UUID
    booking_id: UUID
    user_id: int
    amount: str
    currency: str

    def __post_init__(self):
        self.aggregate_id = self.payment_id
