"""API views for the booking domain."""

from __future__ import annotations

from datetime import date

from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdmin, IsFaculty, IsReservationOwnerOrAdmin, is_admin_user
from shared.application.message_bus import message_bus
from shared.domain.exceptions import ValidationError

from .application.command_handlers import (
    ChangeReservationStatusCommand,
    CreateReservationCommand,
    DeleteReservationCommand,
    UpdateReservationCommand,
)
from .filters import ReservationFilterSet
from .models import Reservation
from .serializers import (
    AvailabilityCheckSerializer,
    ReservationSerializer,
    ReservationStatusSerializer,
    ReservationWriteSerializer,
)
from . import services

ADMIN_ACTIONS = {"update", "partial_update", "destroy", "set_status"}
DEFAULT_LIMIT = 50


def _validated(serializer_class, data) -> dict:
    """Run a DRF serializer, reporting failures as a domain ValidationError."""
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise ValidationError("Invalid request data", fields=serializer.errors)
    return serializer.validated_data


def _limit(request) -> int:
    raw = request.query_params.get("limit")
    if raw is None:
        return DEFAULT_LIMIT
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError("limit must be a positive integer", fields={"limit": ["Must be a positive integer."]})
    if value < 1:
        raise ValidationError("limit must be a positive integer", fields={"limit": ["Must be a positive integer."]})
    return value


class ReservationViewSet(viewsets.ModelViewSet):
    """
    Reservations of halls.

    Writes are dispatched as commands on the message bus; the command
    handlers run the availability resolver inside the same transaction as
    the insert/update. Domain errors are rendered by
    ``shared.infrastructure.exception_handler``.
    """

    queryset = Reservation.objects.select_related("hall", "requester").all()
    serializer_class = ReservationSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReservationFilterSet
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            return [permissions.IsAuthenticated(), IsFaculty()]
        if self.action in ADMIN_ACTIONS:
            return [IsAdmin()]
        if self.action == "retrieve":
            return [permissions.IsAuthenticated(), IsReservationOwnerOrAdmin()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action in {"list", "upcoming", "past"} and not is_admin_user(self.request.user):
            return qs.filter(requester=self.request.user)
        return qs

    def render_conflict(self, reservation: Reservation) -> dict:
        return ReservationSerializer(reservation).data

    def _listing(self, queryset, **extra) -> Response:
        data = ReservationSerializer(queryset, many=True).data
        return Response({**extra, "count": len(data), "reservations": data})

    # ----- commands -----

    def create(self, request, *args, **kwargs):  # type: ignore
        data = _validated(ReservationWriteSerializer, request.data)
        command = CreateReservationCommand(
            requester_id=request.user.id,
            hall_id=data.pop("hall_id", None),
            event_name=data.pop("event_name", None),
            date=data.pop("date", None),
            start_time=data.pop("start_time", None),
            end_time=data.pop("end_time", None),
            **data,
        )
        reservation = message_bus.handle_command(command)
        return Response(
            {"reservation": ReservationSerializer(reservation).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):  # type: ignore
        changes = _validated(ReservationWriteSerializer, request.data)
        reservation = message_bus.handle_command(
            UpdateReservationCommand(reservation_id=int(kwargs["pk"]), changes=dict(changes))
        )
        return Response({"reservation": ReservationSerializer(reservation).data})

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        message_bus.handle_command(
            DeleteReservationCommand(reservation_id=int(kwargs["pk"]), deleted_by=request.user.id)
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post", "patch"], url_path="status", url_name="status")
    def set_status(self, request, pk=None):  # type: ignore
        data = _validated(ReservationStatusSerializer, request.data)
        reservation = message_bus.handle_command(
            ChangeReservationStatusCommand(
                reservation_id=int(pk),
                status=data["status"],
                changed_by=request.user.id,
            )
        )
        return Response({"reservation": ReservationSerializer(reservation).data})

    # ----- queries -----

    @action(detail=False, methods=["post"], url_path="check-availability", url_name="check-availability")
    def check_availability(self, request):  # type: ignore
        data = _validated(AvailabilityCheckSerializer, request.data)
        result = services.check_availability(
            data["hall_id"],
            data["date"],
            data["start_time"],
            data["end_time"],
            exclude_reservation_id=data.get("exclude_reservation_id"),
        )
        return Response({
            "available": result["available"],
            "conflicts": [self.render_conflict(conflict) for conflict in result["conflicts"]],
        })

    @action(detail=False, methods=["get"], url_path=r"date/(?P<day>\d{4}-\d{2}-\d{2})", url_name="by-date")
    def by_date(self, request, day=None):  # type: ignore
        try:
            parsed = date.fromisoformat(day)
        except ValueError:
            raise ValidationError(f"Invalid date: {day}", fields={"date": ["Use YYYY-MM-DD."]})
        queryset = self.get_queryset().filter(date=parsed).order_by("start_time", "pk")
        return self._listing(queryset, date=parsed.isoformat())

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        queryset = self.get_queryset().filter(requester=request.user).order_by("-date", "-start_time")
        return self._listing(queryset)

    @action(detail=False, methods=["get"])
    def upcoming(self, request):  # type: ignore
        today = timezone.localdate()
        queryset = self.get_queryset().filter(date__gte=today).order_by("date", "start_time", "pk")
        return self._listing(queryset[:_limit(request)])

    @action(detail=False, methods=["get"])
    def past(self, request):  # type: ignore
        today = timezone.localdate()
        queryset = self.get_queryset().filter(date__lt=today).order_by("-date", "-start_time", "-pk")
        return self._listing(queryset[:_limit(request)])

    @action(detail=False, methods=["get"])
    def today(self, request):  # type: ignore
        today = timezone.localdate()
        queryset = self.get_queryset().filter(date=today).order_by("start_time", "pk")
        return self._listing(queryset, date=today.isoformat())
