"""Review creation and provider responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List

from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Avg, Count  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from shared.domain.base import DomainEvent
from shared.domain.exceptions import Conflict, InvalidArgument, NotFound, PermissionDenied

from .events import ReviewReceived
from .models import Review

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser
    from apps.users.roles import ActorRole

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


@dataclass
class ReviewOutcome:
    review: Review
    events: List[DomainEvent] = field(default_factory=list)


def refresh_rating(provider) -> None:
    """Recompute average_rating and total_reviews of a facility or coach."""
    stats = provider.reviews.aggregate(avg=Avg("rating"), count=Count("id"))
    average = Decimal(str(stats["avg"] or 0)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
    provider.average_rating = average
    provider.total_reviews = stats["count"]
    provider.save(update_fields=["average_rating", "total_reviews"])


def create_review(user: "CustomUser", booking_id, target: str, rating: int, comment: str = "") -> ReviewOutcome:
    """
    Review the facility or the coach of a completed booking

    The booking must belong to ``user``; each booked resource can be
    reviewed once per booking.
    """
    if target not in Review.Target.values:
        raise InvalidArgument("Review target must be 'facility' or 'coach'", target="target")
    if not 1 <= rating <= 5:
        raise InvalidArgument("Rating must be between 1 and 5", target="rating")

    try:
        booking = (
            Booking.objects.select_related("facility", "facility__owner", "coach", "coach__user")
            .filter(pk=booking_id, user=user, status=Booking.Status.COMPLETED)
            .first()
        )
    except ValidationError:
        booking = None
    if booking is None:
        raise NotFound("Booking not found or not completed", target="booking")

    provider = booking.facility if target == Review.Target.FACILITY else booking.coach
    if provider is None:
        raise InvalidArgument(f"This booking has no {target} to review", target="target")

    lookup = {"user": user, "booking": booking, target: provider}
    if Review.objects.filter(**lookup).exists():
        raise Conflict("You have already reviewed this booking", target="review")

    with transaction.atomic():
        review = Review.objects.create(rating=rating, comment=comment or "", **lookup)
        refresh_rating(provider)

    logger.info(f"Review {review.pk} ({target} {provider.pk}, rating {rating}) created by user {user.pk}")

    if target == Review.Target.FACILITY:
        owner_id, target_name = provider.owner_id, provider.name
    else:
        owner_id, target_name = provider.user_id, provider.full_name

    event = ReviewReceived(
        review_id=review.pk,
        owner_id=owner_id,
        target=target,
        target_name=target_name,
        rating=rating,
    )
    return ReviewOutcome(review=review, events=[event])


def respond_to_review(review: Review, actor: "ActorRole", response: str) -> Review:
    """Store the reviewed provider's public answer."""
    if review.facility_id:
        allowed = review.facility_id in actor.facility_ids
    else:
        allowed = review.coach_id is not None and review.coach_id == actor.coach_id
    if not allowed:
        raise PermissionDenied("Only the reviewed provider can respond", target="review")

    review.provider_response = response
    review.provider_response_at = timezone.now()
    review.save(update_fields=["provider_response", "provider_response_at", "updated_at"])
    return review
