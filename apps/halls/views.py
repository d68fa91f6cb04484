"""Hall catalogue API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.serializers import ReservationSerializer
from apps.users.permissions import IsAdmin, IsAdminOrReadOnly
from shared.domain.exceptions import ValidationError

from . import services
from .filters import HallFilterSet, SystemHandlerFilterSet
from .models import Hall, SystemHandler
from .serializers import HallAvailabilityQuerySerializer, HallSerializer, SystemHandlerSerializer


class HallViewSet(viewsets.ModelViewSet):
    """Halls: readable by every signed-in user, writable by admins."""

    queryset = Hall.objects.all().order_by("name")
    serializer_class = HallSerializer
    permission_classes = [IsAdminOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HallFilterSet
    lookup_value_regex = r"\d+"

    def destroy(self, request, *args, **kwargs):  # type: ignore
        hall = self.get_object()
        services.delete_hall(hall)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def available(self, request):  # type: ignore
        serializer = HallAvailabilityQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            raise ValidationError("Invalid query parameters", fields=serializer.errors)
        params = serializer.validated_data

        halls = services.available_halls(
            params["date"],
            params["start_time"],
            params["end_time"],
            min_capacity=params.get("min_capacity"),
            min_chairs=params.get("min_chairs"),
        )
        data = HallSerializer(halls, many=True).data
        return Response({"count": len(data), "halls": data})

    @action(detail=True, methods=["get"])
    def upcoming(self, request, pk=None):  # type: ignore
        hall = self.get_object()
        limit = request.query_params.get("limit")
        try:
            limit = int(limit) if limit else None
        except ValueError:
            limit = 0
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer", fields={"limit": ["Must be a positive integer."]})
        reservations = services.upcoming_reservations(hall, limit=limit)
        data = ReservationSerializer(reservations, many=True).data
        return Response({"hall": HallSerializer(hall).data, "count": len(data), "reservations": data})


class SystemHandlerViewSet(viewsets.ModelViewSet):
    """Equipment handlers, managed by admins."""

    queryset = SystemHandler.objects.all()
    serializer_class = SystemHandlerSerializer
    permission_classes = [IsAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_class = SystemHandlerFilterSet
