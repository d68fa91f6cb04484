"""FilterSet for the admin reservation listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Reservation


class ReservationFilterSet(django_filters.FilterSet):
    """Date range is inclusive on both ends."""

    start_date = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    hall = django_filters.NumberFilter(field_name="hall_id", lookup_expr="exact")
    status = django_filters.ChoiceFilter(field_name="status", choices=Reservation.Status.choices)
    department = django_filters.CharFilter(field_name="department", lookup_expr="icontains")
    requester = django_filters.NumberFilter(field_name="requester_id", lookup_expr="exact")

    class Meta:
        model = Reservation
        fields = [
            "start_date",
            "end_date",
            "hall",
            "status",
            "department",
            "requester",
        ]
