"""Equipment repository backed by the in-memory store"""

from typing import List

from apps.equipment.domain.entities import Equipment
from shared.infrastructure.repository import InMemoryRepository


class EquipmentRepository(InMemoryRepository[Equipment]):
    collection_name = 'equipment'
    entity_name = 'Equipment'
    entity_class = Equipment

    def inconsistent(self) -> List[Equipment]:
        """Lines whose quantity breakdown does not add up to the total"""
        return [eq for eq in self._records.values() if not eq.quantity.is_consistent]
