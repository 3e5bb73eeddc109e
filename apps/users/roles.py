"""Actor role resolution.

A user's role on the marketplace is derived from the provider profiles
they hold: a coach profile makes them a coach, owning a facility makes
them a facility owner, otherwise they are a regular user. The lookup is
done once per request and the resulting :class:`ActorRole` is passed to
the booking services explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.providers.models import Coach
    from apps.users.models import CustomUser


class ActorKind:
    USER = "user"
    COACH = "coach"
    FACILITY = "facility"


@dataclass(frozen=True)
class ActorRole:
    """Capabilities of the acting user, computed once per request."""

    user: Optional["CustomUser"]
    kind: str = ActorKind.USER
    coach: Optional["Coach"] = None
    facility_ids: frozenset = field(default_factory=frozenset)
    is_admin: bool = False

    @property
    def user_id(self):
        return self.user.pk if self.user is not None else None

    @property
    def coach_id(self):
        return self.coach.pk if self.coach is not None else None

    def is_requester(self, booking: "Booking") -> bool:
        return self.user_id is not None and booking.user_id == self.user_id

    def owns_coach(self, booking: "Booking") -> bool:
        return booking.coach_id is not None and booking.coach_id == self.coach_id

    def owns_facility(self, booking: "Booking") -> bool:
        return booking.facility_id is not None and booking.facility_id in self.facility_ids

    def relation_to(self, booking: "Booking") -> str | None:
        """Return how this actor relates to ``booking``.

        Precedence is requester, coach owner, facility owner, administrator.
        ``None`` means the actor has no rights on the booking.
        """
        if self.is_requester(booking):
            return "user"
        if self.owns_coach(booking):
            return "coach"
        if self.owns_facility(booking):
            return "facility"
        if self.is_admin:
            return "admin"
        return None

    @classmethod
    def system(cls) -> "ActorRole":
        """Actor used by background jobs; acts with administrator rights."""
        return cls(user=None, is_admin=True)


def resolve_actor_role(user: "CustomUser") -> ActorRole:
    """Probe the provider tables once and return the actor's capabilities."""
    from apps.providers.models import Coach, Facility

    coach = Coach.objects.filter(user=user).first()
    facility_ids = frozenset(Facility.objects.filter(owner=user).values_list("id", flat=True))

    if coach is not None:
        kind = ActorKind.COACH
    elif facility_ids:
        kind = ActorKind.FACILITY
    else:
        kind = ActorKind.USER

    return ActorRole(
        user=user,
        kind=kind,
        coach=coach,
        facility_ids=facility_ids,
        is_admin=user.is_platform_admin(),
    )
