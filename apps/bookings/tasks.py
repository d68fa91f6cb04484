"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.routing import handlers_for_reservation
from apps.notifications.services import (
    send_handler_setup_email,
    send_reservation_confirmation_email,
    send_reservation_rejected_email,
)

from .models import Reservation

logger = logging.getLogger(__name__)


def _load(reservation_id: int) -> Reservation | None:
    try:
        return Reservation.objects.select_related("hall", "requester").get(pk=reservation_id)
    except Reservation.DoesNotExist:
        logger.warning(f"Reservation {reservation_id} disappeared before notifications were sent")
        return None


@shared_task(name="bookings.notify_reservation_confirmed")
def notify_reservation_confirmed(reservation_id: int) -> dict[str, int]:
    """
    Confirmation to the requester plus one setup email per equipment handler.

    Every delivery is best-effort: failures are logged by the senders and
    counted here, the reservation itself is never affected.

    Returns:
        dict: {"confirmation": 1|0, "handlers_notified": N, "handlers_failed": M}
    """
    reservation = _load(reservation_id)
    if reservation is None:
        return {"confirmation": 0, "handlers_notified": 0, "handlers_failed": 0}

    confirmation_sent = send_reservation_confirmation_email(reservation)

    notified = failed = 0
    for handler in handlers_for_reservation(reservation):
        if send_handler_setup_email(reservation, handler):
            notified += 1
        else:
            failed += 1

    logger.info(
        f"Reservation {reservation.pk} notifications: confirmation={confirmation_sent}, "
        f"handlers notified={notified}, failed={failed}"
    )
    return {
        "confirmation": int(confirmation_sent),
        "handlers_notified": notified,
        "handlers_failed": failed,
    }


@shared_task(name="bookings.notify_reservation_rejected")
def notify_reservation_rejected(reservation_id: int) -> dict[str, int]:
    """Rejection notice to the requester."""
    reservation = _load(reservation_id)
    if reservation is None:
        return {"rejection": 0}

    return {"rejection": int(send_reservation_rejected_email(reservation))}
