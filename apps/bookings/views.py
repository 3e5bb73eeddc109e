"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.roles import ActorRole, resolve_actor_role
from shared.application.uow import DjangoUnitOfWork

from . import availability
from .models import Booking
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusSerializer,
    CalendarQuerySerializer,
    DateQuerySerializer,
    SlotsQuerySerializer,
)
from .services import cancel_booking, create_booking, update_status


class IsBookingStakeholder(permissions.BasePermission):
    """The requester, the booked coach, the facility owner and admins can see a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        if not request.user.is_authenticated:
            return False
        return view.get_actor_role().relation_to(obj) is not None


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Create bookings, change their status and query availability."""

    queryset = Booking.objects.select_related("user", "facility", "coach", "coach__user", "sport", "package")
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]
    filterset_fields = ["status", "payment_status", "booking_type"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "set_status":
            return BookingStatusSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        return BookingSerializer

    def get_actor_role(self) -> ActorRole:
        if not hasattr(self, "_actor_role"):
            self._actor_role = resolve_actor_role(self.request.user)
        return self._actor_role

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action != "list":
            return qs
        role = self.get_actor_role()
        if role.is_admin:
            return qs
        scope = qs.filter(user=role.user)
        if role.coach is not None:
            scope = scope | qs.filter(coach=role.coach)
        if role.facility_ids:
            scope = scope | qs.filter(facility_id__in=role.facility_ids)
        return scope

    def _outcome_response(self, outcome, status_code=status.HTTP_200_OK):
        data = BookingSerializer(outcome.booking, context=self.get_serializer_context()).data
        return Response(data, status=status_code)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with DjangoUnitOfWork() as uow:
            outcome = create_booking(serializer.to_booking_request(), request.user)
            uow.collect_events(outcome.events)
        return self._outcome_response(outcome, status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch"], url_path="status")
    def set_status(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with DjangoUnitOfWork() as uow:
            outcome = update_status(
                pk,
                serializer.validated_data["status"],
                self.get_actor_role(),
                serializer.validated_data["cancellation_reason"],
            )
            uow.collect_events(outcome.events)
        return self._outcome_response(outcome)

    @action(detail=True, methods=["post", "patch"])
    def cancel(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with DjangoUnitOfWork() as uow:
            outcome = cancel_booking(pk, self.get_actor_role(), serializer.validated_data["reason"])
            uow.collect_events(outcome.events)
        return self._outcome_response(outcome)

    # ----- Availability ---------------------------------------------------

    @action(
        detail=False,
        methods=["get"],
        url_path="availability/slots",
        permission_classes=[permissions.AllowAny],
    )
    def availability_slots(self, request):  # type: ignore
        query = SlotsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        schedule = availability.get_slots(params.get("facility"), params.get("coach"), params.get("date"))
        slots = schedule if params["include_unavailable"] else schedule.available()
        return Response([slot.to_dict() for slot in slots])

    @action(
        detail=False,
        methods=["get"],
        url_path="availability/calendar",
        permission_classes=[permissions.AllowAny],
    )
    def availability_calendar(self, request):  # type: ignore
        query = CalendarQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        dates = availability.get_calendar(
            params.get("facility"), params.get("coach"), params.get("start"), params.get("end")
        )
        return Response({"unavailable_dates": [day.isoformat() for day in dates]})

    @action(
        detail=False,
        methods=["get"],
        url_path="availability/date",
        permission_classes=[permissions.AllowAny],
    )
    def availability_date(self, request):  # type: ignore
        query = DateQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data
        result = availability.get_date_availability(params.get("facility"), params.get("coach"), params.get("date"))
        return Response(result.to_dict())
