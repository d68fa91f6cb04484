"""
Message Bus

Dispatches booking commands to the handler wired for them in
``apps.bookings.bootstrap`` and fans committed domain events out to
their subscribers. Events reach the bus only through
``DjangoUnitOfWork`` after the surrounding transaction has committed.
"""

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent
from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Any], Any]
EventHandler = Callable[[DomainEvent], None]


def _describe(handler: Callable) -> str:
    # Bound methods of handler objects read as "CreateReservationHandler.handle"
    owner = getattr(handler, '__self__', None)
    name = getattr(handler, '__name__', type(handler).__name__)
    return f"{type(owner).__name__}.{name}" if owner is not None else name


class MessageBus:
    """
    Routes commands (exactly one handler each) and events (any number of
    subscribers). Domain errors raised by a command handler propagate to
    the caller unchanged; a failing event subscriber never affects the
    committed command or the other subscribers.
    """

    def __init__(self):
        self._command_handlers: Dict[Type, CommandHandler] = {}
        self._subscribers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    # ----- wiring -----

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already handled by {_describe(self._command_handlers[command_type])}")
        self._command_handlers[command_type] = handler
        logger.debug(f"{command_type.__name__} -> {_describe(handler)}")

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        self._subscribers[event_type].append(handler)
        logger.debug(f"{event_type.__name__} subscribed by {_describe(handler)}")

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    # ----- dispatch -----

    def handle_command(self, command: Any) -> Any:
        """Run the command's handler and return whatever it returns."""
        name = type(command).__name__
        try:
            handler = self._command_handlers[type(command)]
        except KeyError:
            raise ValueError(f"No handler registered for command {name}") from None

        logger.info(f"Dispatching {name}")
        try:
            return handler(command)
        except DomainError as e:
            logger.info(f"{name} refused ({e.kind}): {e.message}")
            raise
        except Exception:
            logger.exception(f"{name} failed unexpectedly")
            raise

    def publish_events(self, events: Iterable[DomainEvent]):
        for event in events:
            self._deliver(event)

    def _deliver(self, event: DomainEvent):
        name = type(event).__name__
        subscribers = self._subscribers.get(type(event))
        if not subscribers:
            logger.warning(f"Nobody subscribed to {name}")
            return

        logger.info(f"Publishing {name} ({event.event_id}) to {len(subscribers)} subscriber(s)")
        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.exception(f"Subscriber {_describe(subscriber)} failed on {name}")


message_bus = MessageBus()
