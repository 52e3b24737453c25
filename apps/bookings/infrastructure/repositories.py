"""
Booking repository backed by the in-memory store

Keeps a secondary index from equipment id to booking ids so the
availability checker only looks at bookings that share a line with the
request. Results are returned in store insertion order, exactly as a
full scan would produce them.
"""

from typing import Dict, Iterable, List, Set

from apps.bookings.domain.entities import Booking
from shared.infrastructure.repository import InMemoryRepository

INDEX_NAME = 'bookings_by_equipment'


class EquipmentBookingIndex:
    """equipment id -> ids of bookings referencing it"""

    def __init__(self, bookings: Iterable[Booking] = ()):
        self.buckets: Dict[str, Set[str]] = {}
        self.members: Dict[str, tuple] = {}
        for booking in bookings:
            self.add(booking)

    def add(self, booking: Booking):
        self.discard(booking.id)
        equipment_ids = tuple(booking.equipment_ids)
        self.members[booking.id] = equipment_ids
        for equipment_id in equipment_ids:
            self.buckets.setdefault(equipment_id, set()).add(booking.id)

    def discard(self, booking_id: str):
        for equipment_id in self.members.pop(booking_id, ()):
            bucket = self.buckets.get(equipment_id)
            if bucket is not None:
                bucket.discard(booking_id)
                if not bucket:
                    del self.buckets[equipment_id]

    def lookup(self, equipment_ids: Iterable[str]) -> Set[str]:
        found: Set[str] = set()
        for equipment_id in equipment_ids:
            found |= self.buckets.get(equipment_id, set())
        return found

    def __len__(self):
        return len(self.members)


class BookingRepository(InMemoryRepository[Booking]):
    collection_name = 'bookings'
    entity_name = 'Booking'
    entity_class = Booking

    @property
    def index(self) -> EquipmentBookingIndex:
        index = self.store.indexes.get(INDEX_NAME)
        if index is None or len(index) != len(self._records):
            index = EquipmentBookingIndex(self._records.values())
            self.store.indexes[INDEX_NAME] = index
        return index

    def save(self, record: Booking) -> Booking:
        index = self.index
        super().save(record)
        index.add(record)
        return record

    def delete(self, record_id: str) -> Booking:
        index = self.index
        record = super().delete(record_id)
        index.discard(record_id)
        return record

    def candidates_for(self, equipment_ids: Iterable[str]) -> List[Booking]:
        """Bookings referencing any of the equipment ids, in insertion order"""
        matched = self.index.lookup(equipment_ids)
        if not matched:
            return []
        return [booking for booking_id, booking in self._records.items() if booking_id in matched]

    def list_active_for_equipment(self, equipment_id: str) -> List[Booking]:
        return [booking for booking in self.candidates_for([equipment_id]) if booking.is_active]
