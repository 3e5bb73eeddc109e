"""API views for payments.

Payments are recorded by the confirm endpoint after the client has paid
through the gateway; the list and detail endpoints are read-only and
show the authenticated user's own payments.
"""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.serializers import BookingSerializer
from apps.users.roles import resolve_actor_role
from shared.application.uow import DjangoUnitOfWork

from .models import Payment
from .serializers import PaymentConfirmSerializer, PaymentSerializer
from .services import confirm_payment


class PaymentViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = PaymentSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_fields = ["status", "booking"]

    def get_queryset(self):  # type: ignore
        qs = Payment.objects.select_related("booking")
        if resolve_actor_role(self.request.user).is_admin:
            return qs
        return qs.filter(user=self.request.user)

    def get_serializer_class(self):  # type: ignore
        if self.action == "confirm":
            return PaymentConfirmSerializer
        return PaymentSerializer

    @action(detail=False, methods=["post"])
    def confirm(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with DjangoUnitOfWork() as uow:
            outcome = confirm_payment(
                serializer.validated_data["booking"],
                serializer.validated_data["reference"],
                resolve_actor_role(request.user),
            )
            uow.collect_events(outcome.events)

        return Response(
            {
                "already_paid": outcome.already_paid,
                "booking": BookingSerializer(outcome.booking).data,
                "payment": PaymentSerializer(outcome.payment).data if outcome.payment else None,
            },
            status=status.HTTP_200_OK,
        )
