"""
Equipment Domain Events
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass
class EquipmentAdded(DomainEvent):
    equipment_id: str
    model: str


@dataclass
class EquipmentUpdated(DomainEvent):
    equipment_id: str
    changed_fields: list


@dataclass
class EquipmentDeleted(DomainEvent):
    """
    Event: An equipment line was removed from inventory

    Bookings referencing it are left untouched.
    """
    equipment_id: str


@dataclass
class EquipmentStatusChanged(DomainEvent):
    """
    Event: The aggregate status label of an equipment line changed

    Triggers:
    - Refresh inventory cards and stats in the UI
    - Persist the store snapshot
    """
    equipment_id: str
    old_status: str
    new_status: str
