"""API views for reviews."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.roles import resolve_actor_role
from shared.application.uow import DjangoUnitOfWork

from .models import Review
from .serializers import ProviderResponseSerializer, ReviewCreateSerializer, ReviewSerializer
from .services import create_review, respond_to_review


class ReviewViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Public list of reviews; players create them and providers respond."""

    queryset = Review.objects.select_related('user', 'booking', 'facility', 'coach', 'coach__user')
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]
    filterset_fields = ['facility', 'coach', 'rating']

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return ReviewCreateSerializer
        if self.action == 'respond':
            return ProviderResponseSerializer
        return ReviewSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with DjangoUnitOfWork() as uow:
            outcome = create_review(
                request.user,
                data['booking'],
                data['target'],
                data['rating'],
                data['comment'],
            )
            uow.collect_events(outcome.events)

        return Response(ReviewSerializer(outcome.review).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAuthenticated])
    def respond(self, request, pk=None):  # type: ignore
        """Answer a review of one of your facilities or your coach profile."""
        review = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = respond_to_review(
            review,
            resolve_actor_role(request.user),
            serializer.validated_data['provider_response'],
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_200_OK)
