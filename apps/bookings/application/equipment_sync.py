"""
Equipment status synchronisation

Keeps the aggregate status label of equipment lines in step with the
bookings that reference them.

Policies:
- TOGGLE: a new booking marks its lines reserved; deleting a booking
  marks its lines available, even if other bookings still hold them.
  Status transitions do not touch equipment.
- DERIVED: after a booking is created, deleted, canceled or returned,
  each affected line is recomputed from the active (scheduled or
  installed) bookings referencing it. Lines in maintenance are left as
  they are.
"""

from enum import Enum
from typing import List
import logging

from shared.domain.records import coerce_enum
from apps.bookings.domain.entities import Booking
from apps.equipment.domain.entities import Equipment, EquipmentStatus

logger = logging.getLogger(__name__)


class EquipmentStatusPolicy(Enum):
    TOGGLE = 'toggle'
    DERIVED = 'derived'


class EquipmentStatusSynchronizer:
    """Applies the configured policy; returns the equipment it touched"""

    def __init__(self, equipment_repo, booking_repo, policy=EquipmentStatusPolicy.TOGGLE):
        self.equipment_repo = equipment_repo
        self.booking_repo = booking_repo
        self.policy = coerce_enum(EquipmentStatusPolicy, policy)

    def booking_created(self, booking: Booking) -> List[Equipment]:
        if self.policy == EquipmentStatusPolicy.DERIVED:
            return self._recompute(booking.equipment_ids)
        return self._set_all(booking.equipment_ids, EquipmentStatus.RESERVED)

    def booking_deleted(self, booking: Booking) -> List[Equipment]:
        """Call after the booking has been removed from the repository"""
        if self.policy == EquipmentStatusPolicy.DERIVED:
            return self._recompute(booking.equipment_ids)
        return self._set_all(booking.equipment_ids, EquipmentStatus.AVAILABLE)

    def booking_status_changed(self, booking: Booking) -> List[Equipment]:
        if self.policy == EquipmentStatusPolicy.DERIVED and not booking.is_active:
            return self._recompute(booking.equipment_ids)
        return []

    def booking_equipment_changed(self, booking: Booking, previous_ids: List[str]) -> List[Equipment]:
        """Lines added to or dropped from a booking by an update"""
        if self.policy != EquipmentStatusPolicy.DERIVED:
            return []
        affected = list(dict.fromkeys(list(previous_ids) + list(booking.equipment_ids)))
        return self._recompute(affected)

    def derived_status(self, equipment: Equipment) -> EquipmentStatus:
        if equipment.in_maintenance:
            return EquipmentStatus.MAINTENANCE
        if self.booking_repo.list_active_for_equipment(equipment.id):
            return EquipmentStatus.RESERVED
        return EquipmentStatus.AVAILABLE

    def _recompute(self, equipment_ids) -> List[Equipment]:
        touched = []
        for equipment in self._existing(equipment_ids):
            if equipment.set_status(self.derived_status(equipment)):
                self.equipment_repo.save(equipment)
                touched.append(equipment)
        return touched

    def _set_all(self, equipment_ids, status: EquipmentStatus) -> List[Equipment]:
        touched = []
        for equipment in self._existing(equipment_ids):
            if equipment.set_status(status):
                self.equipment_repo.save(equipment)
                touched.append(equipment)
        return touched

    def _existing(self, equipment_ids) -> List[Equipment]:
        found = []
        for equipment_id in equipment_ids:
            equipment = self.equipment_repo.get_by_id(equipment_id)
            if equipment is None:
                logger.warning(f"Equipment {equipment_id} not found, status not synchronised")
                continue
            found.append(equipment)
        return found
