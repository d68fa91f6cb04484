"""FilterSets for the hall catalogue."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Hall, SystemHandler


class HallFilterSet(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    min_chairs = django_filters.NumberFilter(field_name="total_chairs", lookup_expr="gte")

    class Meta:
        model = Hall
        fields = [
            "name",
            "has_projector",
            "has_sound_system",
            "has_ac",
            "has_stage",
        ]


class SystemHandlerFilterSet(django_filters.FilterSet):
    class Meta:
        model = SystemHandler
        fields = ["system_type"]
