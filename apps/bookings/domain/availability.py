"""
Availability Checker

Answers "can these equipment lines go out for this period?" by looking
for bookings whose hold windows overlap the requested one.

Availability is tracked per equipment *line*, not per physical unit.
With the default LINE policy any time overlap on a shared line is
reported, however many spare units the line has: the conflict is
surfaced for a human to judge, and the caller decides whether to block
submission. The QUANTITY policy only reports overlaps that would push a
line past its bookable units.

If this check ever runs behind a shared backend, it must execute in the
same serializable transaction (or per-equipment lock) as the booking it
guards, otherwise two concurrent requests can both see "available".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List
import logging

from shared.domain.records import coerce_enum
from shared.domain.value_objects import HoldWindow
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.hold_window import compute_hold_window

logger = logging.getLogger(__name__)


class ConflictPolicy(Enum):
    LINE = 'line'
    QUANTITY = 'quantity'


@dataclass
class AvailabilityResult:
    """Outcome of an availability check; conflicts are data, not errors"""
    available: bool
    conflicts: List[Booking] = field(default_factory=list)
    hold_window: HoldWindow | None = None
    requested_equipment_ids: List[str] = field(default_factory=list)

    def conflicting_equipment_ids(self) -> List[str]:
        """Requested lines that appear in at least one conflict"""
        taken = set()
        for booking in self.conflicts:
            taken.update(booking.equipment_ids)
        return [eid for eid in self.requested_equipment_ids if eid in taken]

    def to_dict(self) -> dict:
        return {
            'available': self.available,
            'conflicts': [booking.to_dict() for booking in self.conflicts],
        }

    def __bool__(self):
        return self.available


class AvailabilityChecker:
    """
    Scans bookings for hold-window overlaps on shared equipment lines

    Filter chain per booking:
    1. skip the excluded booking (the one being edited)
    2. skip canceled bookings
    3. skip bookings sharing no equipment line with the request
    4. use the stored hold window, falling back to raw start/end
    5. inclusive overlap test (touching windows conflict)
    """

    def __init__(self, booking_repo, equipment_repo=None, policy=ConflictPolicy.LINE):
        self.booking_repo = booking_repo
        self.equipment_repo = equipment_repo
        self.policy = coerce_enum(ConflictPolicy, policy)

    def check(
        self,
        equipment_ids: Iterable[str],
        start,
        end,
        margin_hours,
        exclude_booking_id: str | None = None,
        requested_units: Dict[str, int] | None = None,
    ) -> AvailabilityResult:
        """
        Check whether the equipment lines are free for the hold window

        Args:
            equipment_ids: requested equipment line ids
            start, end: event window (ISO-8601 strings or datetimes)
            margin_hours: safety margin applied on both sides
            exclude_booking_id: booking to ignore (edit mode)
            requested_units: units per line, QUANTITY policy only
                (missing lines count as 1)
        """
        requested = list(dict.fromkeys(equipment_ids))
        window = compute_hold_window(start, end, margin_hours)
        overlapping = self.find_overlapping(requested, window, exclude_booking_id)

        if self.policy == ConflictPolicy.QUANTITY:
            conflicts = self._over_capacity(requested, overlapping, requested_units or {})
        else:
            conflicts = overlapping

        if conflicts:
            logger.info(
                f"Availability check for {requested} over {window}: "
                f"{len(conflicts)} conflict(s)"
            )

        return AvailabilityResult(
            available=not conflicts,
            conflicts=conflicts,
            hold_window=window,
            requested_equipment_ids=requested
        )

    def find_overlapping(
        self,
        equipment_ids: List[str],
        window: HoldWindow,
        exclude_booking_id: str | None = None,
    ) -> List[Booking]:
        """Non-canceled bookings on a shared line whose window overlaps"""
        overlapping = []
        for booking in self.booking_repo.candidates_for(equipment_ids):
            if exclude_booking_id is not None and booking.id == exclude_booking_id:
                continue
            if booking.is_canceled:
                continue
            if not booking.shared_equipment(equipment_ids):
                continue
            if window.overlaps_with(booking.effective_window):
                overlapping.append(booking)
        return overlapping

    def _over_capacity(
        self,
        equipment_ids: List[str],
        overlapping: List[Booking],
        requested_units: Dict[str, int],
    ) -> List[Booking]:
        """
        Keep the overlapping bookings that share a line whose committed
        units plus the requested units exceed its bookable units

        The sum is taken over every overlapping booking, even ones that do
        not overlap each other, so this stays on the safe side.
        """
        saturated = set()
        for equipment_id in equipment_ids:
            committed = sum(
                booking.units_of(equipment_id)
                for booking in overlapping
                if equipment_id in booking.equipment_ids
            )
            if not committed:
                continue
            needed = committed + requested_units.get(equipment_id, 1)
            if needed > self._bookable_units(equipment_id):
                saturated.add(equipment_id)

        return [booking for booking in overlapping if booking.shared_equipment(saturated)]

    def _bookable_units(self, equipment_id: str) -> int:
        if self.equipment_repo is None:
            return 0
        equipment = self.equipment_repo.get_by_id(equipment_id)
        if equipment is None:
            logger.warning(f"Equipment {equipment_id} not found, treating it as fully booked")
            return 0
        return equipment.quantity.bookable
