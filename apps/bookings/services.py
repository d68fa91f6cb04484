"""Domain services for reservation availability."""

from __future__ import annotations

from datetime import date, time
from typing import TYPE_CHECKING

from shared.domain.exceptions import NotFoundError

from .domain.availability import resolve_conflicts
from .repositories import DjangoHallRepository, DjangoReservationRepository

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .models import Reservation


def find_conflicts(
    hall_id,
    day: date,
    start_time: time,
    end_time: time,
    *,
    exclude_reservation_id=None,
    repository: DjangoReservationRepository | None = None,
    lock: bool = False,
) -> list["Reservation"]:
    """Reservations of the hall on that date overlapping [start_time, end_time).

    Does not check that the hall exists: an unknown hall simply has no
    reservations. Callers verify hall existence separately.
    """

    repository = repository or DjangoReservationRepository()
    partition = repository.for_partition(hall_id, day, lock=lock)
    return resolve_conflicts(
        partition,
        start_time,
        end_time,
        exclude_reservation_id=exclude_reservation_id,
    )


def check_availability(
    hall_id,
    day: date,
    start_time: time,
    end_time: time,
    *,
    exclude_reservation_id=None,
    repository: DjangoReservationRepository | None = None,
    hall_repository: DjangoHallRepository | None = None,
) -> dict:
    """Read-only pre-check: ``{"available": bool, "conflicts": [...]}``.

    Raises NotFoundError for an unknown hall instead of reporting it free.
    """

    hall_repository = hall_repository or DjangoHallRepository()
    if hall_repository.get(hall_id) is None:
        raise NotFoundError(f"Hall {hall_id} not found")

    conflicts = find_conflicts(
        hall_id,
        day,
        start_time,
        end_time,
        exclude_reservation_id=exclude_reservation_id,
        repository=repository,
    )
    return {"available": not conflicts, "conflicts": conflicts}
