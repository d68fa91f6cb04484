"""Tests for the pure availability resolver and slot value objects."""

from __future__ import annotations

from datetime import time
from types import SimpleNamespace

import pytest

from apps.bookings.domain.availability import resolve_conflicts
from apps.bookings.domain.status import ReservationStatus, can_transition, parse_status
from shared.domain.value_objects import TimeSlot


def slot(pk: int, start: str, end: str) -> SimpleNamespace:
    return SimpleNamespace(pk=pk, start_time=time.fromisoformat(start), end_time=time.fromisoformat(end))


MORNING = [slot(1, "09:00", "10:00")]


def test_overlapping_request_conflicts_with_existing_reservation():
    conflicts = resolve_conflicts(MORNING, time(9, 30), time(10, 30))
    assert [c.pk for c in conflicts] == [1]


@pytest.mark.parametrize(
    "start, end",
    [
        (time(10, 0), time(11, 0)),
        (time(8, 0), time(9, 0)),
    ],
)
def test_touching_intervals_do_not_conflict(start, end):
    assert resolve_conflicts(MORNING, start, end) == []


def test_enclosing_and_enclosed_requests_conflict():
    assert [c.pk for c in resolve_conflicts(MORNING, time(8, 0), time(11, 0))] == [1]
    assert [c.pk for c in resolve_conflicts(MORNING, time(9, 15), time(9, 45))] == [1]


def test_empty_partition_has_no_conflicts():
    assert resolve_conflicts([], time(9, 0), time(17, 0)) == []


def test_exclusion_removes_exactly_that_reservation():
    existing = [slot(1, "09:00", "10:00"), slot(2, "09:30", "11:00")]

    conflicts = resolve_conflicts(existing, time(9, 0), time(10, 0), exclude_reservation_id=1)

    assert [c.pk for c in conflicts] == [2]


def test_conflicts_are_ordered_by_start_then_id():
    existing = [slot(7, "11:00", "12:00"), slot(5, "09:00", "10:00"), slot(3, "11:00", "11:30")]

    conflicts = resolve_conflicts(existing, time(8, 0), time(13, 0))

    assert [c.pk for c in conflicts] == [5, 3, 7]


def test_repeated_calls_give_identical_answers():
    existing = [slot(1, "09:00", "10:00"), slot(2, "13:00", "14:00")]

    first = resolve_conflicts(existing, time(9, 30), time(13, 30))
    second = resolve_conflicts(existing, time(9, 30), time(13, 30))

    assert [c.pk for c in first] == [c.pk for c in second] == [1, 2]


def test_time_slot_rejects_empty_and_inverted_intervals():
    with pytest.raises(ValueError):
        TimeSlot(time(10, 0), time(10, 0))
    with pytest.raises(ValueError):
        TimeSlot(time(11, 0), time(10, 0))


def test_time_slot_minutes_and_label():
    first = TimeSlot(time(9, 0), time(10, 30))
    assert first.minutes == 90
    assert str(first) == "09:00 - 10:30"


def test_status_workflow():
    assert can_transition(ReservationStatus.PENDING, ReservationStatus.APPROVED)
    assert can_transition(ReservationStatus.APPROVED, ReservationStatus.REJECTED)
    assert not can_transition(ReservationStatus.REJECTED, ReservationStatus.APPROVED)
    assert not can_transition(ReservationStatus.APPROVED, ReservationStatus.PENDING)
    assert parse_status("pending") is ReservationStatus.PENDING
    with pytest.raises(ValueError):
        parse_status("cancelled")
