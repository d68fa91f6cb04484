"""Admin registration for halls and system handlers."""

from __future__ import annotations

from django.contrib import admin, messages

from shared.domain.exceptions import ValidationError

from .models import Hall, SystemHandler
from .services import delete_hall


@admin.register(Hall)
class HallAdmin(admin.ModelAdmin):
    list_display = ("name", "capacity", "total_chairs", "has_projector", "has_sound_system", "has_ac", "has_stage")
    list_filter = ("has_projector", "has_sound_system", "has_ac", "has_stage")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")

    def delete_model(self, request, obj):  # type: ignore
        try:
            delete_hall(obj)
        except ValidationError as exc:
            self.message_user(request, exc.message, level=messages.ERROR)


@admin.register(SystemHandler)
class SystemHandlerAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "system_type", "phone")
    list_filter = ("system_type",)
    search_fields = ("name", "email")
