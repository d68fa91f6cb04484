"""API views for analytics.

Admin-only endpoints: reservation statistics and hall utilization over a
date period.
"""

from __future__ import annotations

from datetime import timedelta

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdmin
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import DatePeriod

from .services import hall_utilization, reservation_statistics

DEFAULT_PERIOD_DAYS = 30


class UtilizationQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    hall = serializers.IntegerField(required=False)


class StatisticsView(APIView):
    """Return reservation totals and breakdowns."""

    permission_classes = [IsAdmin]

    def get(self, request, format=None):  # type: ignore
        return Response({"statistics": reservation_statistics()})


class UtilizationView(APIView):
    """Per-hall usage; defaults to the last 30 days including today."""

    permission_classes = [IsAdmin]

    def get(self, request, format=None):  # type: ignore
        serializer = UtilizationQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            raise ValidationError("Invalid query parameters", fields=serializer.errors)
        params = serializer.validated_data

        end_date = params.get("end_date") or timezone.localdate()
        start_date = params.get("start_date") or end_date - timedelta(days=DEFAULT_PERIOD_DAYS - 1)
        try:
            period = DatePeriod(start_date, end_date)
        except ValueError as exc:
            raise ValidationError(str(exc), fields={"start_date": ["Must not be after end_date."]})

        return Response({"utilization": hall_utilization(period, hall_id=params.get("hall"))})
