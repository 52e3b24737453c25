"""
Equipment Command Handlers

Commands:
- SetEquipmentStatusCommand: Change the aggregate status label
- AddEquipmentCommand: Register a new equipment line
- UpdateEquipmentCommand: Merge partial changes into a line
- DeleteEquipmentCommand: Remove a line (bookings are not touched)
"""

from dataclasses import dataclass
import logging

from apps.equipment.domain.entities import Equipment, EquipmentStatus

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class SetEquipmentStatusCommand:
    equipment_id: str
    status: EquipmentStatus


@dataclass
class AddEquipmentCommand:
    data: dict


@dataclass
class UpdateEquipmentCommand:
    equipment_id: str
    changes: dict


@dataclass
class DeleteEquipmentCommand:
    equipment_id: str


# ===== Command Handlers =====

class SetEquipmentStatusHandler:
    """
    Handler for SetEquipmentStatus command

    Used by the maintenance tracking screens; the booking lifecycle goes
    through EquipmentStatusSynchronizer instead.
    """

    def __init__(self, equipment_repo, uow_factory):
        self.equipment_repo = equipment_repo
        self.uow_factory = uow_factory

    def handle(self, command: SetEquipmentStatusCommand):
        with self.uow_factory() as uow:
            equipment = self.equipment_repo.get_or_raise(command.equipment_id)
            if equipment.set_status(command.status):
                self.equipment_repo.save(equipment)
                uow.collect_events(equipment)
                logger.info(f"Equipment {equipment.code} status set to {equipment.status.value}")


class AddEquipmentHandler:
    def __init__(self, equipment_repo, uow_factory):
        self.equipment_repo = equipment_repo
        self.uow_factory = uow_factory

    def handle(self, command: AddEquipmentCommand) -> Equipment:
        from apps.equipment.domain.events import EquipmentAdded

        with self.uow_factory() as uow:
            equipment = Equipment.from_dict(command.data)
            if self.equipment_repo.exists(equipment.id):
                raise ValueError(f"Equipment {equipment.id} already exists")
            if not equipment.quantity.is_consistent:
                logger.warning(
                    f"Equipment {equipment.code} quantity does not add up: "
                    f"{equipment.quantity.to_dict()}"
                )

            equipment.add_event(EquipmentAdded(
                aggregate_id=equipment.id,
                equipment_id=equipment.id,
                model=equipment.model.value
            ))
            self.equipment_repo.save(equipment)
            uow.collect_events(equipment)

        logger.info(f"Equipment added: {equipment.code} (ID: {equipment.id})")
        return equipment


class UpdateEquipmentHandler:
    def __init__(self, equipment_repo, uow_factory):
        self.equipment_repo = equipment_repo
        self.uow_factory = uow_factory

    def handle(self, command: UpdateEquipmentCommand) -> Equipment:
        from apps.equipment.domain.events import EquipmentUpdated

        with self.uow_factory() as uow:
            equipment = self.equipment_repo.get_or_raise(command.equipment_id)
            changes = dict(command.changes)

            # Status goes through set_status so the change is announced
            status = changes.pop('status', None)
            changed = equipment.apply_changes(changes)
            if status is not None and equipment.set_status(status):
                changed.append('status')

            if changed:
                equipment.add_event(EquipmentUpdated(
                    aggregate_id=equipment.id,
                    equipment_id=equipment.id,
                    changed_fields=changed
                ))
            self.equipment_repo.save(equipment)
            uow.collect_events(equipment)

        return equipment


class DeleteEquipmentHandler:
    def __init__(self, equipment_repo, uow_factory):
        self.equipment_repo = equipment_repo
        self.uow_factory = uow_factory

    def handle(self, command: DeleteEquipmentCommand):
        from apps.equipment.domain.events import EquipmentDeleted

        with self.uow_factory() as uow:
            equipment = self.equipment_repo.delete(command.equipment_id)
            equipment.add_event(EquipmentDeleted(
                aggregate_id=equipment.id,
                equipment_id=equipment.id
            ))
            uow.collect_events(equipment)

        logger.info(f"Equipment {command.equipment_id} deleted")
