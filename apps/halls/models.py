"""Hall and facility staff models for HallBook."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.users.models import PHONE_VALIDATOR


class Hall(models.Model):
    """A bookable venue with fixed capacity and equipment."""

    name = models.CharField(_("Name"), max_length=150, unique=True)
    capacity = models.PositiveIntegerField(_("Seating capacity"))
    total_chairs = models.PositiveIntegerField(_("Chair inventory"), default=0)
    has_projector = models.BooleanField(_("Projector"), default=False)
    has_sound_system = models.BooleanField(_("Sound system"), default=False)
    has_ac = models.BooleanField(_("Air conditioning"), default=False)
    has_stage = models.BooleanField(_("Stage"), default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hall")
        verbose_name_plural = _("Halls")
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.capacity} seats)"


class SystemHandler(models.Model):
    """Staff member responsible for one kind of hall equipment."""

    class SystemType(models.TextChoices):
        PROJECTOR = "projector", _("Projector")
        MIC = "mic", _("Microphone")
        SOUND_SYSTEM = "sound_system", _("Sound system")

    name = models.CharField(_("Name"), max_length=150)
    email = models.EmailField(_("Email"), unique=True)
    system_type = models.CharField(
        _("System type"),
        max_length=20,
        choices=SystemType.choices,
    )
    phone = models.CharField(_("Phone"), max_length=20, blank=True, validators=[PHONE_VALIDATOR])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("System handler")
        verbose_name_plural = _("System handlers")
        ordering = ["system_type", "name"]
        indexes = [
            models.Index(fields=["system_type"], name="halls_handler_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_system_type_display()})"
