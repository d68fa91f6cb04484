"""Hall catalogue services."""

from __future__ import annotations

import logging
from datetime import date, time

from django.db import transaction  # type: ignore
from django.db.models import QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.status import BLOCKING_STATUSES
from apps.bookings.models import Reservation
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import TimeSlot

from .models import Hall

logger = logging.getLogger(__name__)


def overlapping_reservations(day: date, start_time: time, end_time: time) -> QuerySet:
    """Blocking reservations on ``day`` whose [start, end) overlaps the given slot."""
    return Reservation.objects.filter(
        date=day,
        status__in=BLOCKING_STATUSES,
        start_time__lt=end_time,
        end_time__gt=start_time,
    )


def available_halls(
    day: date,
    start_time: time,
    end_time: time,
    *,
    min_capacity: int | None = None,
    min_chairs: int | None = None,
) -> QuerySet:
    """Halls with no blocking reservation overlapping the slot, ordered by name."""
    try:
        TimeSlot(start_time, end_time)
    except ValueError as exc:
        raise ValidationError(str(exc), fields={"end_time": ["End time must be after start time."]})

    busy = overlapping_reservations(day, start_time, end_time).values("hall_id")
    qs = Hall.objects.exclude(pk__in=busy)
    if min_capacity is not None:
        qs = qs.filter(capacity__gte=min_capacity)
    if min_chairs is not None:
        qs = qs.filter(total_chairs__gte=min_chairs)
    return qs.order_by("name")


def upcoming_reservations(hall: Hall, *, limit: int | None = None) -> QuerySet:
    """Blocking reservations of the hall from today on, soonest first."""
    qs = (
        hall.reservations.select_related("hall", "requester")
        .filter(date__gte=timezone.localdate(), status__in=BLOCKING_STATUSES)
        .order_by("date", "start_time", "pk")
    )
    if limit:
        qs = qs[:limit]
    return qs


@transaction.atomic
def delete_hall(hall: Hall) -> None:
    """Delete a hall that no reservation references, whatever its status."""
    if Reservation.objects.filter(hall=hall).exists():
        raise ValidationError("Cannot delete hall with existing reservations")
    logger.info(f"Deleting hall {hall.pk} ({hall.name})")
    hall.delete()
