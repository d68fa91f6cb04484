"""
Reservation Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateReservationCommand: Admit a new reservation
- UpdateReservationCommand: Edit reservation fields (resolver-gated)
- ChangeReservationStatusCommand: Move through the status workflow
- DeleteReservationCommand: Remove a reservation (admin)
"""

from dataclasses import dataclass, field
from datetime import date, time
import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from shared.domain.value_objects import TimeSlot
from apps.bookings.domain.events import (
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
    ReservationUpdated,
)
from apps.bookings.domain.status import ReservationStatus, can_transition, parse_status
from apps.bookings.services import find_conflicts

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = ('event_name', 'date', 'start_time', 'end_time', 'hall_id')

EDITABLE_FIELDS = (
    'event_name',
    'hall_id',
    'date',
    'start_time',
    'end_time',
    'department',
    'faculty_incharge',
    'expected_audience',
    'chairs_required',
    'needs_projector',
    'needs_mic',
    'needs_sound_system',
    'additional_requirements',
)


# ===== Commands =====

@dataclass
class CreateReservationCommand:
    """
    Command to admit a new reservation

    This is the primary entry point for booking a hall.
    """
    requester_id: int
    hall_id: int | None
    event_name: str | None
    date: date | None
    start_time: time | None
    end_time: time | None
    department: str = ''
    faculty_incharge: str = ''
    expected_audience: int = 0
    chairs_required: int = 0
    needs_projector: bool = False
    needs_mic: bool = False
    needs_sound_system: bool = False
    additional_requirements: str = ''


@dataclass
class UpdateReservationCommand:
    """Command to edit a reservation; only keys in EDITABLE_FIELDS are applied"""
    reservation_id: int
    changes: dict = field(default_factory=dict)


@dataclass
class ChangeReservationStatusCommand:
    """Command to approve, reject or revoke a reservation"""
    reservation_id: int
    status: str
    changed_by: int | None = None


@dataclass
class DeleteReservationCommand:
    """Command to delete a reservation (admin)"""
    reservation_id: int
    deleted_by: int | None = None


# ===== Validation helpers =====

def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_required(values: dict) -> None:
    missing = [name for name in REQUIRED_FIELDS if _is_blank(values.get(name))]
    if missing:
        raise ValidationError(
            'Please provide all required fields',
            fields={name: ['This field is required.'] for name in missing},
        )


def validate_slot(start_time: time, end_time: time) -> TimeSlot:
    try:
        return TimeSlot(start_time, end_time)
    except ValueError as exc:
        raise ValidationError(str(exc), fields={'end_time': ['End time must be after start time.']})


def validate_counts(values: dict) -> None:
    for name in ('expected_audience', 'chairs_required'):
        value = values.get(name) or 0
        if value < 0:
            raise ValidationError(f"{name} cannot be negative", fields={name: ['Must be zero or more.']})


def ensure_enough_chairs(hall, chairs_required: int) -> None:
    if chairs_required > hall.total_chairs:
        raise ValidationError(
            f"Requested chairs ({chairs_required}) exceed hall capacity ({hall.total_chairs})",
            fields={'chairs_required': [f"Maximum for {hall.name} is {hall.total_chairs}."]},
        )


class _StoreErrorsMixin:
    """Translate persistence failures into domain errors."""

    reservation_repo = None

    def _translate(self, exc: DatabaseError, hall_id, day, start_time, end_time, exclude_reservation_id=None):
        if isinstance(exc, IntegrityError) and None not in (hall_id, day, start_time, end_time):
            # The exclusion constraint fired: another transaction won the slot
            conflicts = find_conflicts(
                hall_id,
                day,
                start_time,
                end_time,
                exclude_reservation_id=exclude_reservation_id,
                repository=self.reservation_repo,
            )
            if conflicts:
                logger.warning(f"Overlap rejected by database constraint for hall {hall_id} on {day}")
                return ConflictError(conflicts)
        logger.error(f"Store failure: {exc}", exc_info=True)
        return StoreError('Reservation store is unavailable, please try again later')


# ===== Command Handlers =====

class CreateReservationHandler(_StoreErrorsMixin):
    """
    Handler for CreateReservation command

    Gates, in order (first failure wins, nothing is written on failure):
    1. Required fields present, start < end
    2. No overlapping blocking reservation (Availability Resolver)
    3. Hall exists
    4. Requested chairs fit the hall's inventory
    5. Insert with the configured default status
    6. Publish ReservationCreated after commit (notifications)

    Gates 2-5 run in one transaction after locking the hall row
    (SELECT FOR UPDATE), so concurrent requests for the same hall are
    serialised. On PostgreSQL the EXCLUDE constraint is the final safety net.
    """

    def __init__(self, reservation_repo, hall_repo, bus=None, default_status: str | None = None):
        self.reservation_repo = reservation_repo
        self.hall_repo = hall_repo
        self.bus = bus
        self.default_status = default_status

    def handle(self, command: CreateReservationCommand):
        """
        Handle reservation admission

        Returns: Created Reservation

        Raises:
            ValidationError, ConflictError, NotFoundError, StoreError
        """
        logger.info(
            f"Admitting reservation for hall {command.hall_id}, requester {command.requester_id}, "
            f"{command.date} {command.start_time}-{command.end_time}"
        )

        values = {name: getattr(command, name) for name in EDITABLE_FIELDS}
        validate_required(values)
        slot = validate_slot(command.start_time, command.end_time)
        validate_counts(values)
        status = parse_status(self.default_status or settings.RESERVATION_DEFAULT_STATUS)

        try:
            with DjangoUnitOfWork(self.bus) as uow:
                hall = self.hall_repo.get(command.hall_id, lock=True)

                conflicts = find_conflicts(
                    command.hall_id,
                    command.date,
                    slot.start_time,
                    slot.end_time,
                    repository=self.reservation_repo,
                    lock=True,
                )
                if conflicts:
                    logger.info(
                        f"Conflict for hall {command.hall_id} on {command.date} {slot}: "
                        f"{[c.pk for c in conflicts]}"
                    )
                    raise ConflictError(conflicts)

                if hall is None:
                    raise NotFoundError(f"Hall {command.hall_id} not found")

                ensure_enough_chairs(hall, command.chairs_required)

                reservation = self.reservation_repo.add(
                    requester_id=command.requester_id,
                    status=status.value,
                    **values,
                )

                uow.add_event(ReservationCreated(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    hall_id=hall.pk,
                    requester_id=command.requester_id,
                    date=command.date,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    status=status.value,
                ))
        except DatabaseError as exc:
            raise self._translate(exc, command.hall_id, command.date, slot.start_time, slot.end_time) from exc

        logger.info(f"Reservation {reservation.pk} created ({reservation.status}) in {hall.name}")

        return reservation


class UpdateReservationHandler(_StoreErrorsMixin):
    """
    Handler for editing a reservation

    The edited slot is re-validated with the resolver, excluding the
    reservation itself, so an edit can never create a double booking.
    """

    def __init__(self, reservation_repo, hall_repo, bus=None):
        self.reservation_repo = reservation_repo
        self.hall_repo = hall_repo
        self.bus = bus

    def handle(self, command: UpdateReservationCommand):
        logger.info(f"Updating reservation {command.reservation_id}: {sorted(command.changes)}")

        changes = {name: value for name, value in command.changes.items() if name in EDITABLE_FIELDS}
        values = {}

        try:
            with DjangoUnitOfWork(self.bus) as uow:
                reservation = self.reservation_repo.get(command.reservation_id, lock=True)
                if not reservation:
                    raise NotFoundError(f"Reservation {command.reservation_id} not found")

                values = {name: getattr(reservation, name) for name in EDITABLE_FIELDS}
                values.update(changes)
                validate_required(values)
                slot = validate_slot(values['start_time'], values['end_time'])
                validate_counts(values)

                hall = self.hall_repo.get(values['hall_id'], lock=True)

                if reservation.blocks_slot:
                    conflicts = find_conflicts(
                        values['hall_id'],
                        values['date'],
                        slot.start_time,
                        slot.end_time,
                        exclude_reservation_id=reservation.pk,
                        repository=self.reservation_repo,
                        lock=True,
                    )
                    if conflicts:
                        raise ConflictError(conflicts)

                if hall is None:
                    raise NotFoundError(f"Hall {values['hall_id']} not found")

                ensure_enough_chairs(hall, values['chairs_required'])

                changed = [name for name in EDITABLE_FIELDS if getattr(reservation, name) != values[name]]
                for name in changed:
                    setattr(reservation, name, values[name])
                if 'hall_id' in changed:
                    reservation.hall = hall
                self.reservation_repo.save(reservation)

                uow.add_event(ReservationUpdated(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    hall_id=hall.pk,
                    changed_fields=changed,
                ))
        except DatabaseError as exc:
            raise self._translate(
                exc,
                values.get('hall_id'),
                values.get('date'),
                values.get('start_time'),
                values.get('end_time'),
                exclude_reservation_id=command.reservation_id,
            ) from exc

        logger.info(f"Reservation {reservation.pk} updated: {changed or 'no changes'}")

        return reservation


class ChangeReservationStatusHandler(_StoreErrorsMixin):
    """Handler for the status workflow (approve / reject / revoke)"""

    def __init__(self, reservation_repo, hall_repo, bus=None):
        self.reservation_repo = reservation_repo
        self.hall_repo = hall_repo
        self.bus = bus

    def handle(self, command: ChangeReservationStatusCommand):
        logger.info(f"Changing status of reservation {command.reservation_id} to {command.status}")

        try:
            target = parse_status(command.status)
        except ValueError as exc:
            raise ValidationError(str(exc), fields={'status': [str(exc)]})

        reservation = None
        try:
            with DjangoUnitOfWork(self.bus) as uow:
                reservation = self.reservation_repo.get(command.reservation_id, lock=True)
                if not reservation:
                    raise NotFoundError(f"Reservation {command.reservation_id} not found")

                current = ReservationStatus(reservation.status)
                if not can_transition(current, target):
                    raise ValidationError(
                        f"Cannot change status from {current.value} to {target.value}",
                        fields={'status': [f"Transition {current.value} -> {target.value} is not allowed."]},
                    )

                if target == ReservationStatus.APPROVED:
                    self.hall_repo.get(reservation.hall_id, lock=True)
                    conflicts = find_conflicts(
                        reservation.hall_id,
                        reservation.date,
                        reservation.start_time,
                        reservation.end_time,
                        exclude_reservation_id=reservation.pk,
                        repository=self.reservation_repo,
                        lock=True,
                    )
                    if conflicts:
                        raise ConflictError(conflicts)

                reservation.status = target.value
                self.reservation_repo.save(reservation, update_fields=['status'])

                uow.add_event(ReservationStatusChanged(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    old_status=current.value,
                    new_status=target.value,
                ))
        except DatabaseError as exc:
            if reservation is None:
                raise self._translate(exc, None, None, None, None) from exc
            raise self._translate(
                exc,
                reservation.hall_id,
                reservation.date,
                reservation.start_time,
                reservation.end_time,
                exclude_reservation_id=reservation.pk,
            ) from exc

        logger.info(f"Reservation {reservation.pk}: {current.value} -> {target.value}")

        return reservation


class DeleteReservationHandler(_StoreErrorsMixin):
    """
    Handler for deleting a reservation

    Removal only frees capacity, so no conflict re-check is needed.
    """

    def __init__(self, reservation_repo, bus=None):
        self.reservation_repo = reservation_repo
        self.bus = bus

    def handle(self, command: DeleteReservationCommand):
        logger.info(f"Deleting reservation {command.reservation_id}")

        try:
            with DjangoUnitOfWork(self.bus) as uow:
                reservation = self.reservation_repo.get(command.reservation_id, lock=True)
                if not reservation:
                    raise NotFoundError(f"Reservation {command.reservation_id} not found")

                event = ReservationDeleted(
                    aggregate_id=reservation.pk,
                    reservation_id=reservation.pk,
                    hall_id=reservation.hall_id,
                    date=reservation.date,
                    deleted_by=command.deleted_by,
                )
                self.reservation_repo.delete(reservation)
                uow.add_event(event)
        except DatabaseError as exc:
            raise self._translate(exc, None, None, None, None) from exc

        logger.info(f"Reservation {command.reservation_id} deleted")
