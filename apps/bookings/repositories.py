"""
Repositories

Django ORM implementations of the store the command handlers depend on.
Handlers receive repository instances at construction (see
``apps.bookings.bootstrap``) instead of reaching for the ORM directly.
"""

from __future__ import annotations

from datetime import date
from typing import Any, List

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.halls.models import Hall

from .domain.status import BLOCKING_STATUSES
from .models import Reservation


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


class DjangoHallRepository:
    def get(self, hall_id, *, lock: bool = False) -> Hall | None:
        """Fetch a hall; with lock=True the row stays locked until commit."""
        queryset = Hall.objects.filter(pk=hall_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        return queryset.first()


class DjangoReservationRepository:
    def get(self, reservation_id, *, lock: bool = False) -> Reservation | None:
        queryset = Reservation.objects.select_related("hall", "requester").filter(pk=reservation_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        return queryset.first()

    def for_partition(self, hall_id, day: date, *, lock: bool = False) -> List[Reservation]:
        """Blocking reservations of one hall on one date."""
        queryset = (
            Reservation.objects.select_related("hall", "requester")
            .filter(hall_id=hall_id, date=day, status__in=BLOCKING_STATUSES)
            .order_by("start_time", "pk")
        )
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        return list(queryset)

    def add(self, **fields: Any) -> Reservation:
        return Reservation.objects.create(**fields)

    def save(self, reservation: Reservation, update_fields: list[str] | None = None) -> None:
        if update_fields is not None:
            update_fields = list(update_fields) + ["updated_at"]
        reservation.save(update_fields=update_fields)

    def delete(self, reservation: Reservation) -> None:
        reservation.delete()
