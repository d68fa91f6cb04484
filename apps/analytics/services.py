"""Aggregations behind the admin analytics endpoints."""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from django.db.models import Count  # type: ignore
from django.db.models.functions import TruncMonth  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.domain.status import BLOCKING_STATUSES
from apps.bookings.models import Reservation
from apps.halls.models import Hall
from shared.domain.value_objects import DatePeriod, TimeSlot

MONTHS_BACK = 6


def _shift_month(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def reservation_statistics(today: date | None = None) -> dict:
    """Totals, per-hall, per-department, per-status and monthly counts."""
    today = today or timezone.localdate()
    reservations = Reservation.objects.all()

    by_hall = [
        {"hall_id": hall.pk, "hall_name": hall.name, "reservation_count": hall.reservation_count}
        for hall in Hall.objects.annotate(reservation_count=Count("reservations")).order_by("name")
    ]

    by_department = [
        {"department": row["department"] or "", "reservation_count": row["reservation_count"]}
        for row in reservations.values("department")
        .annotate(reservation_count=Count("id"))
        .order_by("-reservation_count", "department")
    ]

    by_status = {choice: 0 for choice, _ in Reservation.Status.choices}
    for row in reservations.values("status").annotate(reservation_count=Count("id")):
        by_status[row["status"]] = row["reservation_count"]

    first_month = _shift_month(today, -(MONTHS_BACK - 1))
    monthly = {
        row["month"]: row["reservation_count"]
        for row in reservations.filter(date__gte=first_month)
        .annotate(month=TruncMonth("date"))
        .values("month")
        .annotate(reservation_count=Count("id"))
    }
    by_month = []
    for offset in range(MONTHS_BACK):
        month = _shift_month(first_month, offset)
        by_month.append({"month": month.strftime("%Y-%m"), "reservation_count": monthly.get(month, 0)})

    return {
        "total_reservations": reservations.count(),
        "upcoming_reservations": reservations.filter(date__gte=today).count(),
        "past_reservations": reservations.filter(date__lt=today).count(),
        "by_status": by_status,
        "by_hall": by_hall,
        "by_department": by_department,
        "by_month": by_month,
    }


def hall_utilization(period: DatePeriod, hall_id: int | None = None) -> dict:
    """Blocking reservation count and booked minutes per hall over an inclusive period."""
    halls = Hall.objects.order_by("name")
    if hall_id is not None:
        halls = halls.filter(pk=hall_id)

    counts: dict[int, int] = defaultdict(int)
    minutes: dict[int, int] = defaultdict(int)
    rows = Reservation.objects.filter(
        date__gte=period.start_date,
        date__lte=period.end_date,
        status__in=BLOCKING_STATUSES,
    ).values_list("hall_id", "start_time", "end_time")
    for reservation_hall_id, start_time, end_time in rows:
        counts[reservation_hall_id] += 1
        minutes[reservation_hall_id] += TimeSlot(start_time, end_time).minutes

    return {
        "start_date": period.start_date.isoformat(),
        "end_date": period.end_date.isoformat(),
        "days": len(period),
        "halls": [
            {
                "hall_id": hall.pk,
                "hall_name": hall.name,
                "reservation_count": counts[hall.pk],
                "booked_minutes": minutes[hall.pk],
            }
            for hall in halls
        ],
    }
