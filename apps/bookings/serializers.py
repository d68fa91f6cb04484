"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import Reservation


class ReservationSerializer(serializers.ModelSerializer):
    """Detailed reservation representation."""

    hall_id = serializers.ReadOnlyField(source="hall.id")
    hall_name = serializers.ReadOnlyField(source="hall.name")
    requester = UserShortSerializer(read_only=True)
    requested_systems = serializers.SerializerMethodField()

    class Meta:
        model = Reservation
        fields = [
            "id",
            "hall_id",
            "hall_name",
            "requester",
            "event_name",
            "date",
            "start_time",
            "end_time",
            "department",
            "faculty_incharge",
            "expected_audience",
            "chairs_required",
            "needs_projector",
            "needs_mic",
            "needs_sound_system",
            "requested_systems",
            "additional_requirements",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_requested_systems(self, obj: Reservation) -> list[str]:
        return sorted(obj.requested_systems)


class ReservationWriteSerializer(serializers.Serializer):
    """Parses request payloads; presence and range rules live in the command handlers."""

    hall_id = serializers.IntegerField(required=False, allow_null=True)
    event_name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    date = serializers.DateField(required=False, allow_null=True)
    start_time = serializers.TimeField(required=False, allow_null=True)
    end_time = serializers.TimeField(required=False, allow_null=True)
    department = serializers.CharField(required=False, allow_blank=True, max_length=150)
    faculty_incharge = serializers.CharField(required=False, allow_blank=True, max_length=150)
    expected_audience = serializers.IntegerField(required=False, min_value=0)
    chairs_required = serializers.IntegerField(required=False, min_value=0)
    needs_projector = serializers.BooleanField(required=False)
    needs_mic = serializers.BooleanField(required=False)
    needs_sound_system = serializers.BooleanField(required=False)
    additional_requirements = serializers.CharField(required=False, allow_blank=True)


class AvailabilityCheckSerializer(serializers.Serializer):
    hall_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    exclude_reservation_id = serializers.IntegerField(required=False, allow_null=True)

    def validate(self, attrs):  # type: ignore
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError({"end_time": ["End time must be after start time."]})
        return attrs


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
