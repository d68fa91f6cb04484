"""
Reservation Event Handlers

Run after the reservation transaction has committed. Notification
delivery is handed to Celery so a slow or failing mail server never
affects the outcome of a booking.
"""

import logging

from apps.bookings.domain.events import ReservationCreated, ReservationStatusChanged
from apps.bookings.domain.status import ReservationStatus

logger = logging.getLogger(__name__)


def enqueue_confirmation_notifications(event: ReservationCreated):
    """Approved on admission: confirm to requester, brief equipment handlers"""
    if event.status != ReservationStatus.APPROVED.value:
        logger.info(f"Reservation {event.reservation_id} is {event.status}, notifications wait for review")
        return

    from apps.bookings.tasks import notify_reservation_confirmed

    notify_reservation_confirmed.delay(event.reservation_id)


def enqueue_status_notifications(event: ReservationStatusChanged):
    from apps.bookings.tasks import notify_reservation_confirmed, notify_reservation_rejected

    if event.new_status == ReservationStatus.APPROVED.value:
        notify_reservation_confirmed.delay(event.reservation_id)
    elif event.new_status == ReservationStatus.REJECTED.value:
        notify_reservation_rejected.delay(event.reservation_id)


def log_reservation_event(event):
    logger.info(f"Audit: {event.to_dict()['event_type']} reservation={event.aggregate_id}")
