"""Review domain events."""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReviewReceived(DomainEvent):
    """
    Event: A player reviewed a facility or a coach

    Triggers:
    - In-app ``review_received`` notification to the provider owner
    """
    review_id: int
    owner_id: int
    target: str
    target_name: str
    rating: int
