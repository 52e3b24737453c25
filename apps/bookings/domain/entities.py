"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a reservation of equipment lines
- BookingStatus: FSM states for booking lifecycle
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Set

from shared.domain.base import Aggregate
from shared.domain.exceptions import InvalidStatusTransition
from shared.domain.records import RecordMixin, coerce_enum, unique_ids
from shared.domain.value_objects import HoldWindow, parse_timestamp
from apps.bookings.domain.hold_window import compute_hold_window


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - SCHEDULED -> INSTALLED (equipment delivered and set up on site)
    - SCHEDULED -> CANCELED
    - INSTALLED -> RETURNED (equipment picked up)
    - INSTALLED -> CANCELED
    RETURNED and CANCELED are terminal.
    """
    SCHEDULED = 'scheduled'
    INSTALLED = 'installed'
    RETURNED = 'returned'
    CANCELED = 'canceled'


ALLOWED_TRANSITIONS = {
    BookingStatus.SCHEDULED: {BookingStatus.INSTALLED, BookingStatus.CANCELED},
    BookingStatus.INSTALLED: {BookingStatus.RETURNED, BookingStatus.CANCELED},
    BookingStatus.RETURNED: set(),
    BookingStatus.CANCELED: set(),
}

# Fields the hold window is derived from
HOLD_WINDOW_INPUTS = ('start', 'end', 'margin_hours')


@dataclass(eq=False)
class Booking(RecordMixin, Aggregate):
    """
    Booking Aggregate Root

    Represents a client's reservation of one or more equipment lines for
    an event at a site, over [start, end].

    Key invariants:
    - hold_start/hold_end are stored, and always equal
      start - margin_hours / end + margin_hours once set
    - Equipment and client are referenced by id only
    - Canceled bookings never hold equipment
    """

    FIELD_ALIASES = {
        'clientId': 'client_id',
        'equipmentIds': 'equipment_ids',
        'marginHours': 'margin_hours',
        'totalPerDay': 'total_per_day',
        'totalAmount': 'total_amount',
        'equipmentQuantities': 'equipment_quantities',
        'cancellationReason': 'cancellation_reason',
        'holdStart': 'hold_start',
        'holdEnd': 'hold_end',
    }
    READ_ONLY_FIELDS = ('id', 'status', 'hold_start', 'hold_end', 'cancellation_reason')

    # References
    client_id: str
    equipment_ids: List[str]

    # Event window
    start: datetime
    end: datetime
    margin_hours: float = 6

    # Where
    site: str = ''
    address: str = ''

    status: BookingStatus = BookingStatus.SCHEDULED
    notes: str | None = None

    # Financial fields are carried for the UI, never computed here
    total_per_day: float | None = None
    days: int | None = None
    total_amount: float | None = None

    # Units requested per equipment line (missing lines count as 1)
    equipment_quantities: Dict[str, int] = field(default_factory=dict)

    cancellation_reason: str = ''

    # Derived, stored
    hold_start: datetime | None = None
    hold_end: datetime | None = None

    def __post_init__(self):
        self.start = parse_timestamp(self.start)
        self.end = parse_timestamp(self.end)
        self.status = coerce_enum(BookingStatus, self.status)
        self.equipment_ids = unique_ids(self.equipment_ids)
        self.equipment_quantities = self.coerce_field('equipment_quantities', self.equipment_quantities)
        if self.hold_start is not None:
            self.hold_start = parse_timestamp(self.hold_start)
        if self.hold_end is not None:
            self.hold_end = parse_timestamp(self.hold_end)

    @classmethod
    def coerce_field(cls, name: str, value):
        if name in ('start', 'end'):
            return parse_timestamp(value)
        if name in ('hold_start', 'hold_end'):
            return None if value is None else parse_timestamp(value)
        if name == 'status':
            return coerce_enum(BookingStatus, value)
        if name == 'equipment_ids':
            return unique_ids(value)
        if name == 'equipment_quantities':
            return {key: int(units) for key, units in (value or {}).items()}
        return value

    @classmethod
    def create(cls, **attributes) -> 'Booking':
        """
        Build a new scheduled booking with its hold window computed

        Events: BookingCreated
        """
        booking = cls(**attributes)
        booking.refresh_hold_window()

        from apps.bookings.domain.events import BookingCreated

        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            client_id=booking.client_id,
            equipment_ids=list(booking.equipment_ids),
            hold_window=booking.hold_window
        ))
        return booking

    def refresh_hold_window(self) -> HoldWindow:
        """Recompute hold_start/hold_end from start, end and margin_hours"""
        window = compute_hold_window(self.start, self.end, self.margin_hours)
        self.hold_start = window.hold_start
        self.hold_end = window.hold_end
        return window

    def update(self, changes: dict) -> List[str]:
        """
        Merge a partial update into the booking

        Any change to start, end or margin_hours regenerates the hold
        window. Status must change through the transition methods.
        Events: BookingUpdated
        """
        changed = self.apply_changes(changes)
        if not changed:
            return changed

        window = None
        if any(name in HOLD_WINDOW_INPUTS for name in changed):
            window = self.refresh_hold_window()

        from apps.bookings.domain.events import BookingUpdated

        self.add_event(BookingUpdated(
            aggregate_id=self.id,
            booking_id=self.id,
            changed_fields=changed,
            hold_window=window
        ))
        return changed

    # ===== Status transitions =====

    def install(self):
        """Equipment delivered and set up (SCHEDULED -> INSTALLED)"""
        self._transition(BookingStatus.INSTALLED)

    def mark_returned(self):
        """Equipment picked up (INSTALLED -> RETURNED)"""
        self._transition(BookingStatus.RETURNED)

    def cancel(self, reason: str = ''):
        """
        Cancel booking

        Can be called from SCHEDULED or INSTALLED.
        A canceled booking no longer conflicts with anything.
        """
        self._transition(BookingStatus.CANCELED, reason)
        self.cancellation_reason = reason

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def _transition(self, target: BookingStatus, reason: str = ''):
        if not self.can_transition_to(target):
            raise InvalidStatusTransition(self.status, target)

        from apps.bookings.domain.events import BookingStatusChanged

        old_status = self.status
        self.status = target

        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            old_status=old_status.value,
            new_status=target.value,
            reason=reason
        ))

    # ===== Queries =====

    @property
    def hold_window(self) -> HoldWindow | None:
        """Stored hold window, or None for records saved without one"""
        if self.hold_start is None or self.hold_end is None:
            return None
        return HoldWindow(self.hold_start, self.hold_end)

    @property
    def effective_window(self) -> HoldWindow:
        """Stored hold window, each end falling back to the raw event time"""
        return HoldWindow(self.hold_start or self.start, self.hold_end or self.end)

    @property
    def is_canceled(self) -> bool:
        return self.status == BookingStatus.CANCELED

    @property
    def is_active(self) -> bool:
        """Scheduled or installed: the equipment is (or will be) out"""
        return self.status in (BookingStatus.SCHEDULED, BookingStatus.INSTALLED)

    def shared_equipment(self, equipment_ids) -> Set[str]:
        return set(self.equipment_ids).intersection(equipment_ids)

    def units_of(self, equipment_id: str) -> int:
        return self.equipment_quantities.get(equipment_id, 1)

    def __str__(self):
        return f"Booking {self.id} at {self.site or '-'} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, status={self.status.value}, "
            f"equipment_ids={self.equipment_ids}, window={self.effective_window})"
        )
