"""Integration tests for reservation API endpoints."""

from __future__ import annotations

from datetime import date, timedelta

from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Reservation
from apps.halls.models import Hall, SystemHandler
from apps.users.models import User


class ReservationAPITests(APITestCase):
    """Covers admission, conflicts, queries and admin review of reservations."""

    def setUp(self) -> None:
        self.faculty = User.objects.create_user(
            email="faculty@example.com",
            password="FacultyPass123",
            first_name="Grace",
            last_name="Hopper",
            department="Computer Science",
        )
        self.colleague = User.objects.create_user(
            email="colleague@example.com",
            password="FacultyPass123",
            department="Physics",
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hall = Hall.objects.create(
            name="Main Auditorium",
            capacity=200,
            total_chairs=150,
            has_projector=True,
            has_sound_system=True,
        )
        self.client.force_authenticate(self.faculty)
        self.list_url = reverse("reservation-list")
        self.day = timezone.localdate() + timedelta(days=7)

    def _payload(self, start: str, end: str, **extra) -> dict:
        payload = {
            "hall_id": self.hall.id,
            "event_name": "Guest Lecture",
            "date": str(self.day),
            "start_time": start,
            "end_time": end,
            "department": "Computer Science",
            "faculty_incharge": "Dr. Hopper",
            "expected_audience": 120,
            "chairs_required": 100,
        }
        payload.update(extra)
        return payload

    def _create(self, start: str = "09:00", end: str = "10:00", **extra):
        return self.client.post(self.list_url, self._payload(start, end, **extra), format="json")

    def test_faculty_can_create_reservation(self) -> None:
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        reservation = response.data["reservation"]
        self.assertEqual(reservation["hall_name"], "Main Auditorium")
        self.assertEqual(reservation["status"], Reservation.Status.APPROVED)
        self.assertEqual(reservation["requester"]["email"], "faculty@example.com")
        self.assertEqual(Reservation.objects.get().requester, self.faculty)

    def test_overlap_returns_409_with_conflicting_reservation(self) -> None:
        first = self._create("09:00", "10:00")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        response = self._create("09:30", "10:30")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        error = response.data["error"]
        self.assertEqual(error["kind"], "conflict")
        self.assertEqual([c["id"] for c in error["conflicts"]], [first.data["reservation"]["id"]])
        self.assertEqual(error["conflicts"][0]["start_time"], "09:00:00")
        self.assertEqual(Reservation.objects.count(), 1)

    def test_back_to_back_reservations_are_allowed(self) -> None:
        self.assertEqual(self._create("09:00", "10:00").status_code, status.HTTP_201_CREATED)
        self.assertEqual(self._create("10:00", "11:00").status_code, status.HTTP_201_CREATED)
        self.assertEqual(Reservation.objects.count(), 2)

    def test_too_many_chairs_is_a_validation_error(self) -> None:
        response = self._create(chairs_required=151)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"]["message"], "Requested chairs (151) exceed hall capacity (150)")

    def test_missing_fields_are_reported(self) -> None:
        response = self.client.post(self.list_url, {"hall_id": self.hall.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"]["message"], "Please provide all required fields")
        self.assertIn("event_name", response.data["error"]["fields"])

    def test_unparseable_time_is_a_validation_error(self) -> None:
        response = self._create(start="nine")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("start_time", response.data["error"]["fields"])

    def test_unknown_hall_returns_404(self) -> None:
        response = self._create(hall_id=9999)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["error"]["kind"], "not_found")

    def test_admin_cannot_submit_booking_request(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self._create()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_creation_sends_confirmation_and_handler_emails(self) -> None:
        SystemHandler.objects.create(name="Pat", email="projector@example.com", system_type="projector")
        SystemHandler.objects.create(name="Mo", email="mic@example.com", system_type="mic")

        with self.captureOnCommitCallbacks(execute=True):
            response = self._create(needs_projector=True)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        subjects = sorted(message.subject for message in mail.outbox)
        self.assertEqual(
            subjects,
            ["Booking Confirmation - Guest Lecture", "System Setup Required - Guest Lecture"],
        )

    def test_check_availability(self) -> None:
        existing = self._create("09:00", "10:00").data["reservation"]
        url = reverse("reservation-check-availability")

        busy = self.client.post(
            url,
            {"hall_id": self.hall.id, "date": str(self.day), "start_time": "09:30", "end_time": "10:30"},
            format="json",
        )
        free = self.client.post(
            url,
            {"hall_id": self.hall.id, "date": str(self.day), "start_time": "10:00", "end_time": "11:00"},
            format="json",
        )
        own = self.client.post(
            url,
            {
                "hall_id": self.hall.id,
                "date": str(self.day),
                "start_time": "09:30",
                "end_time": "10:30",
                "exclude_reservation_id": existing["id"],
            },
            format="json",
        )

        self.assertEqual(busy.status_code, status.HTTP_200_OK, busy.data)
        self.assertFalse(busy.data["available"])
        self.assertEqual([c["id"] for c in busy.data["conflicts"]], [existing["id"]])
        self.assertTrue(free.data["available"])
        self.assertEqual(free.data["conflicts"], [])
        self.assertTrue(own.data["available"])

    def test_check_availability_for_unknown_hall_returns_404(self) -> None:
        response = self.client.post(
            reverse("reservation-check-availability"),
            {"hall_id": 999999, "date": str(self.day), "start_time": "09:00", "end_time": "10:00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["error"]["kind"], "not_found")
        self.assertNotIn("available", response.data)

    def test_reservations_by_date_are_ordered_by_start(self) -> None:
        self._create("14:00", "15:00")
        self._create("09:00", "10:00")
        self.client.force_authenticate(self.colleague)

        response = self.client.get(reverse("reservation-by-date", kwargs={"day": str(self.day)}))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(
            [r["start_time"] for r in response.data["reservations"]],
            ["09:00:00", "14:00:00"],
        )

    def test_invalid_date_in_path_is_rejected(self) -> None:
        response = self.client.get(reverse("reservation-by-date", kwargs={"day": "2024-13-45"}))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mine_lists_only_own_reservations(self) -> None:
        self._create("09:00", "10:00")
        self.client.force_authenticate(self.colleague)
        self._create("11:00", "12:00")

        response = self.client.get(reverse("reservation-mine"))

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["reservations"][0]["start_time"], "11:00:00")

    def test_upcoming_and_past(self) -> None:
        past_day = timezone.localdate() - timedelta(days=3)
        Reservation.objects.create(
            hall=self.hall,
            requester=self.faculty,
            event_name="Old Seminar",
            date=past_day,
            start_time="09:00",
            end_time="10:00",
        )
        self._create("09:00", "10:00")

        upcoming = self.client.get(reverse("reservation-upcoming"))
        past = self.client.get(reverse("reservation-past"))

        self.assertEqual([r["event_name"] for r in upcoming.data["reservations"]], ["Guest Lecture"])
        self.assertEqual([r["event_name"] for r in past.data["reservations"]], ["Old Seminar"])

    def test_today_lists_reservations_for_current_date(self) -> None:
        today = timezone.localdate()
        Reservation.objects.create(
            hall=self.hall,
            requester=self.colleague,
            event_name="Morning Meeting",
            date=today,
            start_time="08:00",
            end_time="09:00",
        )

        response = self.client.get(reverse("reservation-today"))

        self.assertEqual(response.data["date"], today.isoformat())
        self.assertEqual(response.data["count"], 1)

    def test_admin_list_filters(self) -> None:
        self._create("09:00", "10:00")
        other_day = self.day + timedelta(days=10)
        Reservation.objects.create(
            hall=self.hall,
            requester=self.colleague,
            event_name="Later",
            date=other_day,
            start_time="09:00",
            end_time="10:00",
            department="Physics",
            status=Reservation.Status.REJECTED,
        )
        self.client.force_authenticate(self.admin)

        everything = self.client.get(self.list_url)
        in_range = self.client.get(self.list_url, {"start_date": str(self.day), "end_date": str(self.day)})
        rejected = self.client.get(self.list_url, {"status": "rejected"})
        physics = self.client.get(self.list_url, {"department": "physics"})

        self.assertEqual(len(everything.data), 2)
        self.assertEqual([r["event_name"] for r in in_range.data], ["Guest Lecture"])
        self.assertEqual([r["event_name"] for r in rejected.data], ["Later"])
        self.assertEqual([r["event_name"] for r in physics.data], ["Later"])

    def test_faculty_list_is_scoped_to_own_reservations(self) -> None:
        self._create("09:00", "10:00")
        self.client.force_authenticate(self.colleague)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_other_faculty_cannot_retrieve_reservation(self) -> None:
        reservation_id = self._create().data["reservation"]["id"]
        detail_url = reverse("reservation-detail", args=[reservation_id])

        self.assertEqual(self.client.get(detail_url).status_code, status.HTTP_200_OK)
        self.client.force_authenticate(self.colleague)
        self.assertEqual(self.client.get(detail_url).status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_edit_is_conflict_checked(self) -> None:
        self._create("09:00", "10:00")
        later_id = self._create("11:00", "12:00").data["reservation"]["id"]
        self.client.force_authenticate(self.admin)
        detail_url = reverse("reservation-detail", args=[later_id])

        clash = self.client.patch(detail_url, {"start_time": "09:30"}, format="json")
        moved = self.client.patch(detail_url, {"start_time": "10:00"}, format="json")

        self.assertEqual(clash.status_code, status.HTTP_409_CONFLICT, clash.data)
        self.assertEqual(moved.status_code, status.HTTP_200_OK, moved.data)
        self.assertEqual(moved.data["reservation"]["start_time"], "10:00:00")

    def test_faculty_cannot_edit_or_delete(self) -> None:
        detail_url = reverse("reservation-detail", args=[self._create().data["reservation"]["id"]])

        self.assertEqual(
            self.client.patch(detail_url, {"event_name": "Renamed"}, format="json").status_code,
            status.HTTP_403_FORBIDDEN,
        )
        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_status_changes(self) -> None:
        reservation_id = self._create().data["reservation"]["id"]
        self.client.force_authenticate(self.admin)
        status_url = reverse("reservation-status", args=[reservation_id])

        with self.captureOnCommitCallbacks(execute=True):
            rejected = self.client.post(status_url, {"status": "rejected"}, format="json")
        back = self.client.post(status_url, {"status": "approved"}, format="json")

        self.assertEqual(rejected.status_code, status.HTTP_200_OK, rejected.data)
        self.assertEqual(rejected.data["reservation"]["status"], "rejected")
        self.assertEqual([m.subject for m in mail.outbox], ["Booking Rejected - Guest Lecture"])
        self.assertEqual(back.status_code, status.HTTP_400_BAD_REQUEST, back.data)

    def test_admin_delete(self) -> None:
        reservation_id = self._create().data["reservation"]["id"]
        self.client.force_authenticate(self.admin)
        detail_url = reverse("reservation-detail", args=[reservation_id])

        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Reservation.objects.exists())
