"""
Availability Resolver

This is the CRITICAL decision function for preventing double bookings.
Given the reservations already held in one (hall, date) partition and a
proposed slot, it returns the reservations the slot would collide with.

The function is pure: it never touches the store, so the pre-check API
and the admission gate give identical answers for the same partition.

Two slots [s1, e1) and [s2, e2) conflict iff s1 < e2 AND s2 < e1.
Back-to-back slots (e1 == s2) do not conflict. The resolver does not
validate start < end; callers reject inverted slots beforehand.
"""

from datetime import time
from typing import Any, Iterable, List, Protocol

from shared.domain.value_objects import intervals_overlap


class Slotted(Protocol):
    """Anything with an id and a [start_time, end_time) interval"""
    pk: Any
    start_time: time
    end_time: time


def resolve_conflicts(
    existing: Iterable[Slotted],
    start_time: time,
    end_time: time,
    *,
    exclude_reservation_id=None,
) -> List[Slotted]:
    """
    Filter a partition down to the reservations overlapping [start_time, end_time)

    Args:
        existing: Blocking reservations of one hall on one date
        start_time: Proposed start (inclusive)
        end_time: Proposed end (exclusive)
        exclude_reservation_id: Reservation to ignore (re-validating an edit)

    Returns:
        Conflicting reservations ordered by (start_time, pk). Empty iff the
        slot can be inserted without breaking the no-double-booking rule.
    """
    conflicts = [
        reservation for reservation in existing
        if (exclude_reservation_id is None or reservation.pk != exclude_reservation_id)
        and intervals_overlap(reservation.start_time, reservation.end_time, start_time, end_time)
    ]
    return sorted(conflicts, key=lambda reservation: (reservation.start_time, reservation.pk))
