"""Admin registration for reservations."""

from __future__ import annotations

from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "event_name",
        "hall",
        "requester",
        "date",
        "start_time",
        "end_time",
        "status",
        "created_at",
    )
    list_filter = ("status", "hall", "date", "needs_projector", "needs_mic", "needs_sound_system")
    search_fields = ("event_name", "department", "faculty_incharge", "hall__name", "requester__email")
    date_hierarchy = "date"
    list_select_related = ("hall", "requester")
    readonly_fields = ("created_at", "updated_at")
