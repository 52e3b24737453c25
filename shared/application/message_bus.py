"""
Message Bus

Routes the lifecycle commands issued by BookingService (create, update,
delete and transition bookings; add, update and delete equipment;
set equipment status) to their handlers, and fans the domain events
committed by a unit of work out to subscribers such as the store
persister or UI refreshers.
"""

from typing import Any, Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

# Command attributes naming the record a command acts on, for log lines
SUBJECT_ATTRIBUTES = ('booking_id', 'equipment_id')


class MessageBus:
    """
    Commands: exactly one handler per command class, result returned
    Events: any number of subscribers per event class

    A subscriber registered for an event class also receives its
    subclasses; subscribing to DomainEvent receives everything.
    """

    def __init__(self):
        self._command_handlers: Dict[Type, Callable] = {}
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_command_handler(self, command_type: Type, handler: Callable[[Any], Any]):
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler
        logger.debug(f"Command handler registered for {command_type.__name__}")

    def register_event_handler(self, event_type: Type[DomainEvent], handler: Callable[[DomainEvent], None]):
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscriber registered for {event_type.__name__}")

    def handle_command(self, command: Any) -> Any:
        """
        Run the handler of a command and return its result

        Raises ValueError when no handler is registered; handler errors
        are logged and re-raised (the unit of work has rolled back).
        """
        name = type(command).__name__
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise ValueError(f"No handler registered for command {name}")

        subject = _subject(command)
        logger.info(f"Handling {name}{subject}")
        try:
            return handler(command)
        except Exception as e:
            logger.error(f"{name}{subject} failed: {e}")
            raise

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver committed events to their subscribers

        A failing subscriber is logged and skipped; the store change that
        produced the event stands.
        """
        for event in events:
            name = type(event).__name__
            subscribers = self._subscribers_for(event)
            if not subscribers:
                logger.debug(f"No subscribers for {name}")
                continue

            logger.info(f"Publishing {name} to {len(subscribers)} subscriber(s) (ID: {event.event_id})")
            for subscriber in subscribers:
                subscriber_name = getattr(subscriber, '__name__', repr(subscriber))
                try:
                    subscriber(event)
                except Exception as e:
                    logger.error(f"Subscriber {subscriber_name} failed on {name}: {e}", exc_info=True)

    def _subscribers_for(self, event: DomainEvent) -> List[Callable]:
        subscribers = []
        for event_type in type(event).__mro__:
            subscribers.extend(self._subscribers.get(event_type, []))
            if event_type is DomainEvent:
                break
        return subscribers


def _subject(command) -> str:
    for attribute in SUBJECT_ATTRIBUTES:
        value = getattr(command, attribute, None)
        if value is not None:
            return f" ({attribute}={value})"
    return ''
