import pytest

from apps.equipment.domain.entities import (
    Dimensions,
    Equipment,
    EquipmentModel,
    EquipmentQuantity,
    EquipmentStatus,
)
from apps.equipment.domain.events import EquipmentAdded, EquipmentDeleted, EquipmentStatusChanged, EquipmentUpdated
from shared.domain.base import DomainEvent
from shared.domain.exceptions import NotFoundError


@pytest.fixture
def published(service):
    events = []
    service.message_bus.register_event_handler(DomainEvent, events.append)
    return events


class TestEquipmentEntity:
    def test_specs_filled_from_model(self):
        equipment = Equipment(code='CT90-002', model='CT90')

        assert equipment.model == EquipmentModel.CT90
        assert equipment.airflow_m3h == 20000
        assert equipment.dimensions_m == Dimensions(1.52, 0.92, 0.85)
        assert equipment.name == 'CT90 - Climatizador Evaporativo'

    def test_round_trip_through_dict(self):
        data = {
            'id': 'eq-1',
            'code': 'CT50-009',
            'model': 'CT50',
            'status': 'maintenance',
            'quantity': {'total': 4, 'available': 3, 'reserved': 0, 'maintenance': 1},
            'lastMaintenance': '2024-01-10',
        }

        equipment = Equipment.from_dict(data)
        dumped = equipment.to_dict()

        assert equipment.status == EquipmentStatus.MAINTENANCE
        assert dumped['quantity'] == data['quantity']
        assert dumped['lastMaintenance'] == '2024-01-10'
        assert dumped['dimensions_m'] == {'w': 1.30, 'd': 0.80, 'h': 0.53}

    def test_invalid_model(self):
        with pytest.raises(ValueError):
            Equipment(code='X-1', model='CT100')

    def test_set_status_only_announces_changes(self):
        equipment = Equipment(code='CT50-001', model='CT50')

        assert equipment.set_status('available') is False
        assert equipment.events == []
        assert equipment.set_status(EquipmentStatus.RESERVED) is True
        assert [type(event) for event in equipment.events] == [EquipmentStatusChanged]


class TestEquipmentQuantity:
    def test_consistency(self):
        assert EquipmentQuantity(total=15, available=12, reserved=3).is_consistent
        assert not EquipmentQuantity(total=15, available=12, reserved=2).is_consistent

    def test_bookable_excludes_maintenance(self):
        assert EquipmentQuantity(total=5, available=3, reserved=0, maintenance=2).bookable == 3
        assert EquipmentQuantity(total=1, available=0, reserved=0, maintenance=4).bookable == 0

    def test_from_value(self):
        assert EquipmentQuantity.from_value({'total': '3', 'available': 3}) == EquipmentQuantity(3, 3, 0, 0)
        with pytest.raises(ValueError):
            EquipmentQuantity.from_value(3)


class TestEquipmentCommands:
    def test_add_announces_equipment(self, service, published):
        equipment = service.add_equipment({'code': 'CT80-004', 'model': 'CT80'})

        assert service.get_equipment(equipment.id) is equipment
        assert [type(event) for event in published] == [EquipmentAdded]

    def test_add_duplicate_id(self, service, equipment):
        with pytest.raises(ValueError):
            service.add_equipment({'id': 'eq-a', 'code': 'CT50-002', 'model': 'CT50'})

    def test_add_inconsistent_quantity_is_kept(self, service, caplog):
        equipment = service.add_equipment({
            'code': 'CT50-003',
            'model': 'CT50',
            'quantity': {'total': 5, 'available': 1, 'reserved': 1, 'maintenance': 0},
        })

        assert equipment.quantity.total == 5
        assert 'does not add up' in caplog.text

    def test_update_routes_status_through_set_status(self, service, equipment, published):
        service.update_equipment('eq-a', {'status': 'maintenance', 'notes': 'pump replaced'})

        updated = service.get_equipment('eq-a')
        assert updated.status == EquipmentStatus.MAINTENANCE
        assert updated.notes == 'pump replaced'
        updates = [event for event in published if isinstance(event, EquipmentUpdated)]
        assert sorted(updates[0].changed_fields) == ['notes', 'status']
        assert any(isinstance(event, EquipmentStatusChanged) for event in published)

    def test_set_status(self, service, equipment):
        service.set_equipment_status('eq-b', EquipmentStatus.MAINTENANCE)

        assert service.get_equipment('eq-b').in_maintenance

    def test_set_status_invalid_value(self, service, equipment):
        with pytest.raises(ValueError):
            service.set_equipment_status('eq-b', 'broken')
        assert service.get_equipment('eq-b').status == EquipmentStatus.AVAILABLE

    def test_delete_leaves_bookings(self, service, equipment, booking_data, published):
        booking = service.create_booking(booking_data(['eq-a']))

        service.delete_equipment('eq-a')

        assert [eq.id for eq in service.list_equipment()] == ['eq-b', 'eq-c']
        assert service.get_booking(booking.id).equipment_ids == ['eq-a']
        assert isinstance(published[-1], EquipmentDeleted)

    def test_unknown_equipment(self, service):
        with pytest.raises(NotFoundError):
            service.set_equipment_status('missing', 'available')
        with pytest.raises(NotFoundError):
            service.update_equipment('missing', {'notes': 'x'})
        with pytest.raises(NotFoundError):
            service.delete_equipment('missing')
