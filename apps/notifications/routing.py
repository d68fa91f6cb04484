"""Equipment handler routing.

A reservation's equipment booleans map onto handler system types; every
registered handler of a requested type gets exactly one notification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.halls.models import SystemHandler

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Reservation


EQUIPMENT_SYSTEM_TYPES = {
    "needs_projector": SystemHandler.SystemType.PROJECTOR,
    "needs_mic": SystemHandler.SystemType.MIC,
    "needs_sound_system": SystemHandler.SystemType.SOUND_SYSTEM,
}


def system_types_for(reservation: "Reservation") -> set[str]:
    """System types requested by the reservation's equipment flags."""
    return {
        str(system_type)
        for flag, system_type in EQUIPMENT_SYSTEM_TYPES.items()
        if getattr(reservation, flag, False)
    }


def handlers_for_reservation(reservation: "Reservation") -> list[SystemHandler]:
    """Handlers to notify; empty when no equipment was requested."""
    system_types = system_types_for(reservation)
    if not system_types:
        return []
    return list(SystemHandler.objects.filter(system_type__in=system_types).order_by("system_type", "name"))
