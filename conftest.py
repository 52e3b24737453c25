import pytest

from apps.bookings.services import BookingService
from config.settings import RentalSettings
from shared.infrastructure.store import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def settings():
    return RentalSettings()


@pytest.fixture
def service(store, settings):
    return BookingService(store, settings)


@pytest.fixture
def equipment(service):
    """Three equipment lines, one per model"""
    return [
        service.add_equipment({
            'id': 'eq-a',
            'code': 'CT50-001',
            'model': 'CT50',
            'quantity': {'total': 2, 'available': 2, 'reserved': 0, 'maintenance': 0},
        }),
        service.add_equipment({
            'id': 'eq-b',
            'code': 'CT80-001',
            'model': 'CT80',
            'quantity': {'total': 1, 'available': 1, 'reserved': 0, 'maintenance': 0},
        }),
        service.add_equipment({
            'id': 'eq-c',
            'code': 'CT90-001',
            'model': 'CT90',
        }),
    ]


@pytest.fixture
def booking_data():
    def make(equipment_ids=('eq-a',), start='2024-01-10T10:00:00Z', end='2024-01-10T18:00:00Z', **extra):
        data = {
            'clientId': 'client-1',
            'equipmentIds': list(equipment_ids),
            'start': start,
            'end': end,
            'marginHours': 6,
            'site': 'Expo Center',
        }
        data.update(extra)
        return data
    return make
