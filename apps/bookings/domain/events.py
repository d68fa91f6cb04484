"""
Reservation Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass, field
from datetime import date, time

from shared.domain.base import DomainEvent


@dataclass
class ReservationCreated(DomainEvent):
    """
    Event: A new reservation was admitted

    Triggers (when the reservation is approved):
    - Send confirmation email to the requester
    - Send setup instructions to the equipment handlers
    """
    reservation_id: int = None
    hall_id: int = None
    requester_id: int = None
    date: date = None
    start_time: time = None
    end_time: time = None
    status: str = ''


@dataclass
class ReservationUpdated(DomainEvent):
    """
    Event: Reservation fields were edited

    Triggers:
    - Audit log entry
    """
    reservation_id: int = None
    hall_id: int = None
    changed_fields: list = field(default_factory=list)


@dataclass
class ReservationStatusChanged(DomainEvent):
    """
    Event: Reservation moved through the status workflow

    Triggers:
    - APPROVED: confirmation to requester, instructions to handlers
    - REJECTED: rejection notice to requester
    """
    reservation_id: int = None
    old_status: str = ''
    new_status: str = ''


@dataclass
class ReservationDeleted(DomainEvent):
    """
    Event: Reservation was removed by an administrator

    Triggers:
    - Audit log entry
    """
    reservation_id: int = None
    hall_id: int = None
    date: date = None
    deleted_by: int | None = None
