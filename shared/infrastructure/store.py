"""
In-memory Store

Holds every record the rental core works with (clients, equipment,
bookings, payments, quotes) in insertion-ordered dictionaries keyed by id.

The store is an explicit object: repositories, the availability checker
and the command handlers receive it by constructor injection. Durable
save/load is left to external subscribers of the message bus.
"""

import copy
import logging
from typing import Dict, Iterable

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Process-local record store"""

    COLLECTIONS = ('clients', 'equipment', 'bookings', 'payments', 'quotes')

    def __init__(self):
        self._collections: Dict[str, dict] = {name: {} for name in self.COLLECTIONS}
        # Secondary indexes owned by repositories; dropped on bulk changes
        self.indexes: Dict[str, object] = {}

    def collection(self, name: str) -> dict:
        """Return the live mapping for a collection (id -> record)"""
        try:
            return self._collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    @property
    def clients(self) -> dict:
        return self._collections['clients']

    @property
    def equipment(self) -> dict:
        return self._collections['equipment']

    @property
    def bookings(self) -> dict:
        return self._collections['bookings']

    @property
    def payments(self) -> dict:
        return self._collections['payments']

    @property
    def quotes(self) -> dict:
        return self._collections['quotes']

    def snapshot(self) -> Dict[str, dict]:
        """
        Capture every collection for rollback

        Maps collection -> record id -> (record, deep copy of its state).
        The record object itself is kept so ``restore`` can put the old
        state back into the instances callers already hold.
        """
        return {
            name: {
                record_id: (record, copy.deepcopy(vars(record)))
                for record_id, record in records.items()
            }
            for name, records in self._collections.items()
        }

    def restore(self, snapshot: Dict[str, dict]):
        """Bring every collection back to a snapshot, record objects included"""
        # Mutate in place so repositories holding collection references stay valid
        for name in self.COLLECTIONS:
            live = self._collections[name]
            live.clear()
            for record_id, (record, state) in snapshot.get(name, {}).items():
                attributes = vars(record)
                attributes.clear()
                attributes.update(copy.deepcopy(state))
                live[record_id] = record
        self.indexes.clear()
        logger.debug("Store restored from snapshot")

    def replace(self, name: str, records: Iterable):
        """Replace a whole collection (seed loading)"""
        live = self.collection(name)
        live.clear()
        for record in records:
            live[record.id] = record
        self.indexes.clear()

    def clear(self):
        for live in self._collections.values():
            live.clear()
        self.indexes.clear()

    def counts(self) -> Dict[str, int]:
        return {name: len(records) for name, records in self._collections.items()}

    def __repr__(self):
        summary = ', '.join(f"{name}={count}" for name, count in self.counts().items())
        return f"InMemoryStore({summary})"
