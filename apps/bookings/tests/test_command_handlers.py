"""Tests for reservation command handlers (admission, edit, review, delete)."""

from __future__ import annotations

from datetime import date, time
from types import SimpleNamespace

import pytest
from django.core import mail
from django.db import DatabaseError, IntegrityError

from apps.bookings.application.command_handlers import (
    ChangeReservationStatusCommand,
    CreateReservationCommand,
    CreateReservationHandler,
    DeleteReservationCommand,
    UpdateReservationCommand,
)
from apps.bookings.domain.events import ReservationDeleted
from apps.bookings.models import Reservation
from apps.bookings.repositories import DjangoHallRepository, DjangoReservationRepository
from apps.halls.models import Hall, SystemHandler
from apps.users.models import User
from shared.application.message_bus import MessageBus, message_bus
from shared.domain.exceptions import ConflictError, NotFoundError, StoreError, ValidationError

DAY = date(2024, 5, 1)


@pytest.fixture
def faculty(db):
    return User.objects.create_user(
        email="faculty@example.com",
        password="StrongPass123",
        first_name="Grace",
        last_name="Hopper",
        department="Computer Science",
    )


@pytest.fixture
def hall(db):
    return Hall.objects.create(name="Main Auditorium", capacity=100, total_chairs=100, has_projector=True)


def make_command(faculty, hall, start="09:00", end="10:00", **overrides):
    values = dict(
        requester_id=faculty.id,
        hall_id=hall.id,
        event_name="Seminar",
        date=DAY,
        start_time=time.fromisoformat(start),
        end_time=time.fromisoformat(end),
        department="Computer Science",
    )
    values.update(overrides)
    return CreateReservationCommand(**values)


@pytest.mark.django_db
def test_admission_creates_approved_reservation(faculty, hall):
    reservation = message_bus.handle_command(make_command(faculty, hall))

    assert reservation.pk is not None
    assert reservation.status == Reservation.Status.APPROVED
    assert reservation.hall == hall
    assert reservation.requester == faculty


@pytest.mark.django_db
def test_overlapping_request_is_rejected_with_the_conflict(faculty, hall):
    existing = message_bus.handle_command(make_command(faculty, hall, "09:00", "10:00"))

    with pytest.raises(ConflictError) as excinfo:
        message_bus.handle_command(make_command(faculty, hall, "09:30", "10:30"))

    assert [c.pk for c in excinfo.value.conflicts] == [existing.pk]
    assert Reservation.objects.count() == 1


@pytest.mark.django_db
def test_back_to_back_requests_are_admitted(faculty, hall):
    message_bus.handle_command(make_command(faculty, hall, "09:00", "10:00"))
    message_bus.handle_command(make_command(faculty, hall, "10:00", "11:00"))
    message_bus.handle_command(make_command(faculty, hall, "08:00", "09:00"))

    assert Reservation.objects.count() == 3


@pytest.mark.django_db
def test_same_slot_in_another_hall_is_admitted(faculty, hall):
    other = Hall.objects.create(name="Seminar Room", capacity=40, total_chairs=40)
    message_bus.handle_command(make_command(faculty, hall))
    message_bus.handle_command(make_command(faculty, other))

    assert Reservation.objects.count() == 2


@pytest.mark.django_db
def test_chairs_over_inventory_report_both_numbers(faculty, hall):
    with pytest.raises(ValidationError) as excinfo:
        message_bus.handle_command(make_command(faculty, hall, chairs_required=120))

    assert excinfo.value.message == "Requested chairs (120) exceed hall capacity (100)"
    assert not Reservation.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize("start, end", [("10:00", "10:00"), ("11:00", "10:00")])
def test_empty_or_inverted_slot_is_rejected(faculty, hall, start, end):
    with pytest.raises(ValidationError):
        message_bus.handle_command(make_command(faculty, hall, start, end))

    assert not Reservation.objects.exists()


@pytest.mark.django_db
def test_missing_required_fields_are_listed(faculty, hall):
    with pytest.raises(ValidationError) as excinfo:
        message_bus.handle_command(make_command(faculty, hall, event_name="  ", date=None))

    assert excinfo.value.message == "Please provide all required fields"
    assert set(excinfo.value.fields) == {"event_name", "date"}


@pytest.mark.django_db
def test_unknown_hall_is_not_found(faculty):
    with pytest.raises(NotFoundError):
        message_bus.handle_command(make_command(faculty, SimpleNamespace(id=9999)))


@pytest.mark.django_db
def test_conflict_is_reported_before_chair_check(faculty, hall):
    message_bus.handle_command(make_command(faculty, hall))

    with pytest.raises(ConflictError):
        message_bus.handle_command(make_command(faculty, hall, "09:15", "09:45", chairs_required=500))


@pytest.mark.django_db
def test_rejected_reservation_does_not_block(faculty, hall):
    first = message_bus.handle_command(make_command(faculty, hall))
    message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=first.pk, status="rejected"))

    second = message_bus.handle_command(make_command(faculty, hall))

    assert second.status == Reservation.Status.APPROVED


@pytest.mark.django_db
def test_pending_default_status_still_holds_the_slot(faculty, hall):
    handler = CreateReservationHandler(
        DjangoReservationRepository(),
        DjangoHallRepository(),
        bus=MessageBus(),
        default_status="pending",
    )
    pending = handler.handle(make_command(faculty, hall))

    assert pending.status == Reservation.Status.PENDING
    with pytest.raises(ConflictError):
        handler.handle(make_command(faculty, hall, "09:30", "10:30"))


@pytest.mark.django_db
def test_edit_into_occupied_slot_is_refused(faculty, hall):
    message_bus.handle_command(make_command(faculty, hall, "09:00", "10:00"))
    later = message_bus.handle_command(make_command(faculty, hall, "11:00", "12:00"))

    with pytest.raises(ConflictError):
        message_bus.handle_command(
            UpdateReservationCommand(reservation_id=later.pk, changes={"start_time": time(9, 30)})
        )

    later.refresh_from_db()
    assert later.start_time == time(11, 0)


@pytest.mark.django_db
def test_edit_may_overlap_its_own_previous_slot(faculty, hall):
    reservation = message_bus.handle_command(make_command(faculty, hall, "09:00", "10:00"))

    updated = message_bus.handle_command(
        UpdateReservationCommand(
            reservation_id=reservation.pk,
            changes={"start_time": time(9, 30), "end_time": time(10, 30), "event_name": "Workshop"},
        )
    )

    assert updated.start_time == time(9, 30)
    assert updated.event_name == "Workshop"


@pytest.mark.django_db
def test_edit_checks_chairs_against_new_hall(faculty, hall):
    small = Hall.objects.create(name="Small Room", capacity=20, total_chairs=20)
    reservation = message_bus.handle_command(make_command(faculty, hall, chairs_required=50))

    with pytest.raises(ValidationError) as excinfo:
        message_bus.handle_command(UpdateReservationCommand(reservation_id=reservation.pk, changes={"hall_id": small.pk}))

    assert excinfo.value.message == "Requested chairs (50) exceed hall capacity (20)"


@pytest.mark.django_db
def test_edit_of_missing_reservation_is_not_found():
    with pytest.raises(NotFoundError):
        message_bus.handle_command(UpdateReservationCommand(reservation_id=404, changes={"event_name": "x"}))


@pytest.mark.django_db
def test_invalid_status_transition_is_rejected(faculty, hall):
    reservation = message_bus.handle_command(make_command(faculty, hall))
    message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=reservation.pk, status="rejected"))

    with pytest.raises(ValidationError):
        message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=reservation.pk, status="approved"))
    with pytest.raises(ValidationError):
        message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=reservation.pk, status="cancelled"))


@pytest.mark.django_db
def test_approval_rechecks_overlap(faculty, hall):
    approved = Reservation.objects.create(
        hall=hall, requester=faculty, event_name="A", date=DAY,
        start_time=time(9, 0), end_time=time(10, 0), status=Reservation.Status.APPROVED,
    )
    # Inserted directly, bypassing admission
    pending = Reservation.objects.create(
        hall=hall, requester=faculty, event_name="B", date=DAY,
        start_time=time(9, 30), end_time=time(10, 30), status=Reservation.Status.PENDING,
    )

    with pytest.raises(ConflictError) as excinfo:
        message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=pending.pk, status="approved"))

    assert [c.pk for c in excinfo.value.conflicts] == [approved.pk]


@pytest.mark.django_db
def test_delete_removes_reservation(faculty, hall):
    reservation = message_bus.handle_command(make_command(faculty, hall))

    message_bus.handle_command(DeleteReservationCommand(reservation_id=reservation.pk))

    assert not Reservation.objects.exists()
    with pytest.raises(NotFoundError):
        message_bus.handle_command(DeleteReservationCommand(reservation_id=reservation.pk))


@pytest.mark.django_db
def test_admission_notifies_requester_and_handlers(faculty, hall, django_capture_on_commit_callbacks):
    SystemHandler.objects.create(name="Pat", email="projector@example.com", system_type="projector")
    SystemHandler.objects.create(name="Sam", email="sound@example.com", system_type="sound_system")

    with django_capture_on_commit_callbacks(execute=True):
        message_bus.handle_command(make_command(faculty, hall, needs_projector=True))

    recipients = sorted(message.to[0] for message in mail.outbox)
    assert recipients == ["faculty@example.com", "projector@example.com"]


@pytest.mark.django_db
def test_rejection_sends_notice(faculty, hall, django_capture_on_commit_callbacks):
    reservation = message_bus.handle_command(make_command(faculty, hall))

    with django_capture_on_commit_callbacks(execute=True):
        message_bus.handle_command(ChangeReservationStatusCommand(reservation_id=reservation.pk, status="rejected"))

    assert [message.subject for message in mail.outbox] == ["Booking Rejected - Seminar"]


@pytest.mark.django_db
def test_failed_conflict_publishes_nothing(faculty, hall, django_capture_on_commit_callbacks):
    message_bus.handle_command(make_command(faculty, hall))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ConflictError):
            message_bus.handle_command(make_command(faculty, hall, "09:30", "10:30"))

    assert callbacks == []
    assert mail.outbox == []


class FailingReservationRepository(DjangoReservationRepository):
    """Passes the gate, then fails on insert; later partition reads see ``late_rows``."""

    def __init__(self, error, late_rows=()):
        self.error = error
        self.late_rows = list(late_rows)
        self.reads = 0

    def for_partition(self, hall_id, day, *, lock=False):
        self.reads += 1
        return [] if self.reads == 1 else self.late_rows

    def add(self, **fields):
        raise self.error


@pytest.mark.django_db
def test_integrity_error_from_store_becomes_conflict(faculty, hall):
    winner = SimpleNamespace(pk=77, start_time=time(9, 0), end_time=time(10, 0))
    repo = FailingReservationRepository(IntegrityError("reservation_no_overlap"), late_rows=[winner])
    handler = CreateReservationHandler(repo, DjangoHallRepository(), bus=MessageBus())

    with pytest.raises(ConflictError) as excinfo:
        handler.handle(make_command(faculty, hall))

    assert excinfo.value.conflicts == [winner]


@pytest.mark.django_db
def test_database_failure_becomes_store_error(faculty, hall):
    repo = FailingReservationRepository(DatabaseError("connection lost"))
    handler = CreateReservationHandler(repo, DjangoHallRepository(), bus=MessageBus())

    with pytest.raises(StoreError):
        handler.handle(make_command(faculty, hall))


def test_bus_refuses_second_handler_for_same_command():
    bus = MessageBus()
    bus.register_command_handler(DeleteReservationCommand, lambda command: None)

    with pytest.raises(ValueError):
        bus.register_command_handler(DeleteReservationCommand, lambda command: None)
    with pytest.raises(ValueError):
        bus.handle_command(UpdateReservationCommand(reservation_id=1, changes={}))


def test_failing_subscriber_does_not_stop_the_others():
    bus = MessageBus()
    delivered = []

    def broken(event):
        raise RuntimeError("smtp down")

    bus.register_event_handler(ReservationDeleted, broken)
    bus.register_event_handler(ReservationDeleted, delivered.append)
    event = ReservationDeleted(reservation_id=5)

    bus.publish_events([event])

    assert delivered == [event]
