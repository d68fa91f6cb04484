"""Reservation model for HallBook."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.status import BLOCKING_STATUSES, ReservationStatus


class Reservation(models.Model):
    """A time-bounded claim on a hall for an event."""

    class Status(models.TextChoices):
        APPROVED = ReservationStatus.APPROVED.value, _("Approved")
        PENDING = ReservationStatus.PENDING.value, _("Pending")
        REJECTED = ReservationStatus.REJECTED.value, _("Rejected")

    hall = models.ForeignKey(
        "halls.Hall",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    requester = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    event_name = models.CharField(_("Event"), max_length=255)
    date = models.DateField(_("Date"))
    start_time = models.TimeField(_("Start time"))
    end_time = models.TimeField(_("End time"))
    department = models.CharField(_("Department"), max_length=150, blank=True)
    faculty_incharge = models.CharField(_("Faculty in-charge"), max_length=150, blank=True)
    expected_audience = models.PositiveIntegerField(_("Expected audience"), default=0)
    chairs_required = models.PositiveIntegerField(_("Chairs required"), default=0)
    needs_projector = models.BooleanField(_("Needs projector"), default=False)
    needs_mic = models.BooleanField(_("Needs microphone"), default=False)
    needs_sound_system = models.BooleanField(_("Needs sound system"), default=False)
    additional_requirements = models.TextField(_("Additional requirements"), blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.APPROVED,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Reservation")
        verbose_name_plural = _("Reservations")
        ordering = ["-date", "-start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="reservation_valid_times",
            ),
        ]
        indexes = [
            models.Index(fields=["hall", "date"], name="reservation_hall_date_idx"),
            models.Index(fields=["date", "start_time"], name="reservation_date_start_idx"),
            models.Index(fields=["status"], name="reservation_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_name} @ {self.hall_id} on {self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M}"

    @property
    def blocks_slot(self) -> bool:
        """Rejected reservations never hold their slot."""
        return self.status in BLOCKING_STATUSES

    @property
    def requested_systems(self) -> set[str]:
        from apps.notifications.routing import system_types_for

        return system_types_for(self)
