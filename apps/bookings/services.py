"""Booking service: the interface the UI and forms call into.

Wires the store, repositories, availability checker, equipment status
synchroniser and command handlers together, and routes lifecycle
commands through the message bus.
"""

from __future__ import annotations

from typing import Iterable
import logging

from config.settings import RentalSettings, load_settings
from shared.application.message_bus import MessageBus
from shared.application.records import RecordService
from shared.application.uow import InMemoryUnitOfWork
from shared.domain.value_objects import HoldWindow
from shared.infrastructure.store import InMemoryStore
from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    DeleteBookingCommand,
    DeleteBookingHandler,
    InstallBookingCommand,
    InstallBookingHandler,
    ReturnBookingCommand,
    ReturnBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
)
from apps.bookings.application.equipment_sync import EquipmentStatusSynchronizer
from apps.bookings.domain.availability import AvailabilityChecker, AvailabilityResult
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.hold_window import compute_hold_window
from apps.bookings.infrastructure.repositories import BookingRepository
from apps.clients.infrastructure.repositories import ClientRepository
from apps.equipment.application.command_handlers import (
    AddEquipmentCommand,
    AddEquipmentHandler,
    DeleteEquipmentCommand,
    DeleteEquipmentHandler,
    SetEquipmentStatusCommand,
    SetEquipmentStatusHandler,
    UpdateEquipmentCommand,
    UpdateEquipmentHandler,
)
from apps.equipment.domain.entities import Equipment
from apps.equipment.infrastructure.repositories import EquipmentRepository
from apps.finances.infrastructure.repositories import PaymentRepository
from apps.quotes.infrastructure.repositories import QuoteRepository

logger = logging.getLogger(__name__)


class BookingService:
    """
    Facade over the rental core

    One instance per store. Everything is synchronous and runs to
    completion; callers on a shared backend must serialise
    ``check_availability`` + ``create_booking`` per equipment line.
    """

    def __init__(
        self,
        store: InMemoryStore,
        settings: RentalSettings | None = None,
        message_bus: MessageBus | None = None,
    ):
        self.store = store
        self.settings = settings or RentalSettings()
        self.message_bus = message_bus or MessageBus()

        self.booking_repo = BookingRepository(store)
        self.equipment_repo = EquipmentRepository(store)

        self.availability = AvailabilityChecker(
            self.booking_repo,
            self.equipment_repo,
            policy=self.settings.booking_conflict_policy
        )
        self.equipment_sync = EquipmentStatusSynchronizer(
            self.equipment_repo,
            self.booking_repo,
            policy=self.settings.equipment_status_policy
        )

        self.clients = RecordService(ClientRepository(store), self._unit_of_work)
        self.payments = RecordService(PaymentRepository(store), self._unit_of_work)
        self.quotes = RecordService(QuoteRepository(store), self._unit_of_work)

        self._register_handlers()

    @classmethod
    def bootstrap(
        cls,
        settings: RentalSettings | None = None,
        store: InMemoryStore | None = None,
        seed: bool | None = None,
    ) -> 'BookingService':
        """Build a service from settings, optionally loading the demo dataset"""
        settings = settings or load_settings()
        store = store if store is not None else InMemoryStore()

        if settings.seed_demo_data if seed is None else seed:
            from apps.demo_data import load_seed_data

            load_seed_data(store)

        service = cls(store, settings)
        for equipment in service.equipment_repo.inconsistent():
            logger.warning(
                f"Equipment {equipment.code} quantity does not add up: "
                f"{equipment.quantity.to_dict()}"
            )
        return service

    def _unit_of_work(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.store, self.message_bus)

    def _register_handlers(self):
        bus = self.message_bus
        booking_args = (self.booking_repo, self.equipment_sync, self._unit_of_work)
        equipment_args = (self.equipment_repo, self._unit_of_work)

        handlers = {
            CreateBookingCommand: CreateBookingHandler(
                *booking_args,
                default_margin_hours=self.settings.default_margin_hours
            ),
            UpdateBookingCommand: UpdateBookingHandler(*booking_args),
            DeleteBookingCommand: DeleteBookingHandler(*booking_args),
            InstallBookingCommand: InstallBookingHandler(*booking_args),
            ReturnBookingCommand: ReturnBookingHandler(*booking_args),
            CancelBookingCommand: CancelBookingHandler(*booking_args),
            SetEquipmentStatusCommand: SetEquipmentStatusHandler(*equipment_args),
            AddEquipmentCommand: AddEquipmentHandler(*equipment_args),
            UpdateEquipmentCommand: UpdateEquipmentHandler(*equipment_args),
            DeleteEquipmentCommand: DeleteEquipmentHandler(*equipment_args),
        }
        for command_type, handler in handlers.items():
            bus.register_command_handler(command_type, handler.handle)

    # ===== Hold window & availability =====

    def compute_hold_window(self, start, end, margin_hours) -> HoldWindow:
        return compute_hold_window(start, end, margin_hours)

    def check_availability(
        self,
        equipment_ids: Iterable[str],
        start,
        end,
        margin_hours=None,
        exclude_booking_id: str | None = None,
        requested_units: dict | None = None,
    ) -> AvailabilityResult:
        if margin_hours is None:
            margin_hours = self.settings.default_margin_hours
        return self.availability.check(
            equipment_ids,
            start,
            end,
            margin_hours,
            exclude_booking_id=exclude_booking_id,
            requested_units=requested_units
        )

    # ===== Booking lifecycle =====

    def create_booking(self, data: dict) -> Booking:
        """
        Create a booking from form data (camelCase or snake_case keys)

        Raises ValueError when a required field is missing or unknown.
        Submitted holdStart/holdEnd are ignored; the window is recomputed.
        """
        fields = Booking.normalize_keys(data, allow_read_only=True)
        fields.pop('hold_start', None)
        fields.pop('hold_end', None)
        try:
            command = CreateBookingCommand(**fields)
        except TypeError as e:
            raise ValueError(f"Invalid booking input: {e}") from None
        return self.message_bus.handle_command(command)

    def update_booking(self, booking_id: str, updates: dict) -> Booking:
        return self.message_bus.handle_command(UpdateBookingCommand(booking_id, dict(updates)))

    def delete_booking(self, booking_id: str) -> None:
        self.message_bus.handle_command(DeleteBookingCommand(booking_id))

    def install_booking(self, booking_id: str) -> Booking:
        return self.message_bus.handle_command(InstallBookingCommand(booking_id))

    def return_booking(self, booking_id: str) -> Booking:
        return self.message_bus.handle_command(ReturnBookingCommand(booking_id))

    def cancel_booking(self, booking_id: str, reason: str = '') -> Booking:
        return self.message_bus.handle_command(CancelBookingCommand(booking_id, reason))

    def get_booking(self, booking_id: str) -> Booking:
        return self.booking_repo.get_or_raise(booking_id)

    def list_bookings(self):
        return self.booking_repo.list()

    # ===== Equipment =====

    def set_equipment_status(self, equipment_id: str, status) -> None:
        self.message_bus.handle_command(SetEquipmentStatusCommand(equipment_id, status))

    def add_equipment(self, data: dict) -> Equipment:
        return self.message_bus.handle_command(AddEquipmentCommand(dict(data)))

    def update_equipment(self, equipment_id: str, changes: dict) -> Equipment:
        return self.message_bus.handle_command(UpdateEquipmentCommand(equipment_id, dict(changes)))

    def delete_equipment(self, equipment_id: str) -> None:
        self.message_bus.handle_command(DeleteEquipmentCommand(equipment_id))

    def get_equipment(self, equipment_id: str) -> Equipment:
        return self.equipment_repo.get_or_raise(equipment_id)

    def list_equipment(self):
        return self.equipment_repo.list()
