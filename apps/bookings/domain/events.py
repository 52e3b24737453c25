"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
They are published on the message bus after the unit of work commits.
"""

from dataclasses import dataclass, field
from typing import List

from shared.domain.base import DomainEvent
from shared.domain.value_objects import HoldWindow


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created

    Triggers:
    - Equipment lines shown as reserved
    - Store snapshot persisted
    """
    booking_id: str
    client_id: str
    equipment_ids: List[str]
    hold_window: HoldWindow


@dataclass
class BookingUpdated(DomainEvent):
    """
    Event: Booking fields were changed in place

    ``hold_window`` is set when start, end or margin changed.
    """
    booking_id: str
    changed_fields: List[str] = field(default_factory=list)
    hold_window: HoldWindow | None = None


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: Booking moved along its lifecycle

    scheduled -> installed -> returned, or -> canceled
    """
    booking_id: str
    old_status: str
    new_status: str
    reason: str = ''


@dataclass
class BookingDeleted(DomainEvent):
    """
    Event: Booking was removed from the store

    Triggers:
    - Equipment status reset
    - Store snapshot persisted
    """
    booking_id: str
    equipment_ids: List[str]
