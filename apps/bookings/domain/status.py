"""
Reservation Status Finite State Machine

State transitions:
- PENDING -> APPROVED (admin approves; overlap re-checked)
- PENDING -> REJECTED (admin rejects)
- APPROVED -> REJECTED (admin revokes)

New reservations start in the configured default status
(``RESERVATION_DEFAULT_STATUS``), APPROVED unless review is switched on.
"""

from enum import Enum


class ReservationStatus(Enum):
    APPROVED = 'approved'   # Holds the slot, notifications sent
    PENDING = 'pending'     # Waiting for admin review, holds the slot
    REJECTED = 'rejected'   # Never blocks the slot


BLOCKING_STATUSES = (
    ReservationStatus.APPROVED.value,
    ReservationStatus.PENDING.value,
)

ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.APPROVED, ReservationStatus.REJECTED},
    ReservationStatus.APPROVED: {ReservationStatus.REJECTED},
    ReservationStatus.REJECTED: set(),
}


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def parse_status(value) -> ReservationStatus:
    """Accept an enum member or its string value; raise ValueError otherwise."""
    if isinstance(value, ReservationStatus):
        return value
    try:
        return ReservationStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in ReservationStatus)
        raise ValueError(f"Unknown status '{value}'. Expected one of: {allowed}")
