"""
Bootstrap

Wires command handlers (with their repositories) and event handlers
onto a message bus. Called from ``BookingsConfig.ready()`` for the
process-wide bus; tests can build an isolated bus the same way.
"""

import logging

from apps.bookings.application.command_handlers import (
    ChangeReservationStatusCommand,
    ChangeReservationStatusHandler,
    CreateReservationCommand,
    CreateReservationHandler,
    DeleteReservationCommand,
    DeleteReservationHandler,
    UpdateReservationCommand,
    UpdateReservationHandler,
)
from apps.bookings.application.event_handlers import (
    enqueue_confirmation_notifications,
    enqueue_status_notifications,
    log_reservation_event,
)
from apps.bookings.domain.events import (
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
    ReservationUpdated,
)
from apps.bookings.repositories import DjangoHallRepository, DjangoReservationRepository

logger = logging.getLogger(__name__)


def bootstrap(bus, reservation_repo=None, hall_repo=None):
    """Register booking command and event handlers on ``bus``."""

    if bus.has_command_handler(CreateReservationCommand):
        return bus

    reservation_repo = reservation_repo or DjangoReservationRepository()
    hall_repo = hall_repo or DjangoHallRepository()

    bus.register_command_handler(
        CreateReservationCommand,
        CreateReservationHandler(reservation_repo, hall_repo, bus=bus).handle,
    )
    bus.register_command_handler(
        UpdateReservationCommand,
        UpdateReservationHandler(reservation_repo, hall_repo, bus=bus).handle,
    )
    bus.register_command_handler(
        ChangeReservationStatusCommand,
        ChangeReservationStatusHandler(reservation_repo, hall_repo, bus=bus).handle,
    )
    bus.register_command_handler(
        DeleteReservationCommand,
        DeleteReservationHandler(reservation_repo, bus=bus).handle,
    )

    bus.register_event_handler(ReservationCreated, enqueue_confirmation_notifications)
    bus.register_event_handler(ReservationCreated, log_reservation_event)
    bus.register_event_handler(ReservationStatusChanged, enqueue_status_notifications)
    bus.register_event_handler(ReservationStatusChanged, log_reservation_event)
    bus.register_event_handler(ReservationUpdated, log_reservation_event)
    bus.register_event_handler(ReservationDeleted, log_reservation_event)

    logger.debug("Booking handlers registered")
    return bus
