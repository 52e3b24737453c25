"""
Unit of Work Pattern

Makes each lifecycle command all-or-nothing against the in-memory store
and ensures domain events are published only after a successful commit.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def collect_events(self, aggregate):
        """Collect events from aggregate root"""
        pass


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    In-memory implementation of Unit of Work

    Snapshots the store when entered and restores the snapshot if the
    block raises, so booking and equipment mutations made by one command
    land together or not at all.

    Usage:
        with InMemoryUnitOfWork(store, message_bus) as uow:
            booking = booking_repo.get_or_raise(booking_id)
            booking.cancel(reason)
            uow.collect_events(booking)
            booking_repo.save(booking)
        # Events are published after commit
    """

    def __init__(self, store, message_bus=None):
        self.store = store
        self.message_bus = message_bus
        self._events: List[DomainEvent] = []
        self._snapshot = None

    def __enter__(self):
        """Take a snapshot of the store"""
        self._snapshot = self.store.snapshot()
        self._events = []
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            self._snapshot = None

    def commit(self):
        """Keep changes and publish collected events"""
        logger.debug(f"Committing unit of work with {len(self._events)} events")

        events = self._events.copy()
        self._events.clear()

        if events:
            self._publish_events(events)

    def rollback(self):
        """Restore the store snapshot and discard events"""
        logger.warning(f"Rolling back unit of work, discarding {len(self._events)} events")
        self._events.clear()
        if self._snapshot is not None:
            self.store.restore(self._snapshot)

    def collect_events(self, aggregate):
        """
        Collect events from aggregate root

        Extracts all domain events from the aggregate and
        clears them from the aggregate.
        """
        if hasattr(aggregate, 'events'):
            new_events = aggregate.events
            if new_events:
                self._events.extend(new_events)
                aggregate.clear_events()
                logger.debug(
                    f"Collected {len(new_events)} events from "
                    f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
                )

    def collect_event(self, event: DomainEvent):
        """Queue an event that has no aggregate to carry it"""
        self._events.append(event)

    def _publish_events(self, events: List[DomainEvent]):
        """Publish collected events to the message bus"""
        if self.message_bus is None:
            return

        logger.info(f"Publishing {len(events)} domain events after commit")

        try:
            self.message_bus.publish_events(events)
        except Exception as e:
            logger.error(f"Error publishing events: {e}", exc_info=True)
            # Changes are already committed to the store
