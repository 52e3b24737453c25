"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within a unit of work.

Commands:
- CreateBookingCommand: Create a new booking
- UpdateBookingCommand: Merge partial changes into a booking
- DeleteBookingCommand: Remove a booking
- InstallBookingCommand: Equipment installed on site
- ReturnBookingCommand: Equipment picked up
- CancelBookingCommand: Cancel a booking
"""

from dataclasses import dataclass, field
from typing import Dict, List
import logging

from apps.bookings.domain.entities import Booking, BookingStatus

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    Required-field validation belongs to the forms; availability is
    checked by the caller beforehand, overlapping bookings are allowed.
    """
    client_id: str
    equipment_ids: List[str]
    start: str
    end: str
    margin_hours: float | None = None
    site: str = ''
    address: str = ''
    notes: str | None = None
    total_per_day: float | None = None
    days: int | None = None
    total_amount: float | None = None
    equipment_quantities: Dict[str, int] = field(default_factory=dict)
    status: BookingStatus = BookingStatus.SCHEDULED


@dataclass
class UpdateBookingCommand:
    """Command to merge partial changes (snake_case or camelCase keys)"""
    booking_id: str
    changes: dict


@dataclass
class DeleteBookingCommand:
    """Command to remove a booking from the store"""
    booking_id: str


@dataclass
class InstallBookingCommand:
    booking_id: str


@dataclass
class ReturnBookingCommand:
    booking_id: str


@dataclass
class CancelBookingCommand:
    """Command to cancel a booking"""
    booking_id: str
    reason: str = ''


# ===== Command Handlers =====

class _BookingHandler:
    def __init__(self, booking_repo, equipment_sync, uow_factory):
        self.booking_repo = booking_repo
        self.equipment_sync = equipment_sync
        self.uow_factory = uow_factory

    def _collect(self, uow, booking: Booking, touched_equipment):
        uow.collect_events(booking)
        for equipment in touched_equipment:
            uow.collect_events(equipment)


class CreateBookingHandler(_BookingHandler):
    """
    Handler for CreateBooking command

    1. Start unit of work (store snapshot)
    2. Create Booking aggregate with its hold window
    3. Save booking
    4. Synchronise equipment status (reserved)
    5. Commit; events published after commit
    """

    def __init__(self, booking_repo, equipment_sync, uow_factory, default_margin_hours: float = 6):
        super().__init__(booking_repo, equipment_sync, uow_factory)
        self.default_margin_hours = default_margin_hours

    def handle(self, command: CreateBookingCommand) -> Booking:
        margin_hours = command.margin_hours
        if margin_hours is None:
            margin_hours = self.default_margin_hours

        logger.info(
            f"Creating booking for client {command.client_id}, "
            f"equipment {command.equipment_ids}, {command.start} - {command.end}"
        )

        with self.uow_factory() as uow:
            booking = Booking.create(
                client_id=command.client_id,
                equipment_ids=list(command.equipment_ids),
                start=command.start,
                end=command.end,
                margin_hours=margin_hours,
                site=command.site,
                address=command.address,
                notes=command.notes,
                total_per_day=command.total_per_day,
                days=command.days,
                total_amount=command.total_amount,
                equipment_quantities=dict(command.equipment_quantities),
                status=command.status
            )
            self.booking_repo.save(booking)

            touched = self.equipment_sync.booking_created(booking)
            self._collect(uow, booking, touched)

        logger.info(f"Booking created successfully: {booking.id} (hold {booking.hold_window})")
        return booking


class UpdateBookingHandler(_BookingHandler):
    """Handler for partial booking updates"""

    def handle(self, command: UpdateBookingCommand) -> Booking:
        logger.info(f"Updating booking {command.booking_id}: {sorted(command.changes)}")

        with self.uow_factory() as uow:
            booking = self.booking_repo.get_or_raise(command.booking_id)
            previous_ids = list(booking.equipment_ids)

            changed = booking.update(command.changes)
            self.booking_repo.save(booking)

            touched = []
            if 'equipment_ids' in changed and previous_ids != booking.equipment_ids:
                touched = self.equipment_sync.booking_equipment_changed(booking, previous_ids)
            self._collect(uow, booking, touched)

        logger.info(f"Booking {booking.id} updated: {changed}")
        return booking


class DeleteBookingHandler(_BookingHandler):
    """
    Handler for deleting a booking

    Removes the booking, then resets equipment status for every line it
    referenced.
    """

    def handle(self, command: DeleteBookingCommand):
        logger.info(f"Deleting booking {command.booking_id}")

        with self.uow_factory() as uow:
            booking = self.booking_repo.delete(command.booking_id)

            from apps.bookings.domain.events import BookingDeleted

            booking.add_event(BookingDeleted(
                aggregate_id=booking.id,
                booking_id=booking.id,
                equipment_ids=list(booking.equipment_ids)
            ))

            touched = self.equipment_sync.booking_deleted(booking)
            self._collect(uow, booking, touched)

        logger.info(f"Booking {command.booking_id} deleted successfully")


class _TransitionHandler(_BookingHandler):
    action = ''

    def _apply(self, booking: Booking, command):
        raise NotImplementedError

    def handle(self, command):
        logger.info(f"{self.action} booking {command.booking_id}")

        with self.uow_factory() as uow:
            booking = self.booking_repo.get_or_raise(command.booking_id)
            self._apply(booking, command)
            self.booking_repo.save(booking)

            touched = self.equipment_sync.booking_status_changed(booking)
            self._collect(uow, booking, touched)

        logger.info(f"Booking {booking.id} is now {booking.status.value}")
        return booking


class InstallBookingHandler(_TransitionHandler):
    """Handler for SCHEDULED -> INSTALLED"""
    action = 'Installing'

    def _apply(self, booking, command):
        booking.install()


class ReturnBookingHandler(_TransitionHandler):
    """Handler for INSTALLED -> RETURNED"""
    action = 'Returning'

    def _apply(self, booking, command):
        booking.mark_returned()


class CancelBookingHandler(_TransitionHandler):
    """Handler for cancelling booking"""
    action = 'Cancelling'

    def _apply(self, booking, command):
        booking.cancel(command.reason)
