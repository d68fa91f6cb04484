"""Serializers for halls and system handlers."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hall, SystemHandler


class HallSerializer(serializers.ModelSerializer):
    class Meta:
        model = Hall
        fields = [
            "id",
            "name",
            "capacity",
            "total_chairs",
            "has_projector",
            "has_sound_system",
            "has_ac",
            "has_stage",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class SystemHandlerSerializer(serializers.ModelSerializer):
    system_type_display = serializers.CharField(source="get_system_type_display", read_only=True)

    class Meta:
        model = SystemHandler
        fields = [
            "id",
            "name",
            "email",
            "system_type",
            "system_type_display",
            "phone",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class HallAvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters of the available-halls lookup."""

    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    min_capacity = serializers.IntegerField(required=False, min_value=0)
    min_chairs = serializers.IntegerField(required=False, min_value=0)
