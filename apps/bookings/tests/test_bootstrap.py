from datetime import datetime, timezone

from apps.bookings.services import BookingService
from apps.demo_data import load_seed_data
from apps.equipment.domain.entities import EquipmentStatus
from config.settings import RentalSettings
from shared.infrastructure.store import InMemoryStore

NOW = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_seed_data_fills_every_collection():
    store = load_seed_data(InMemoryStore(), now=NOW)

    assert store.counts() == {'clients': 3, 'equipment': 3, 'bookings': 2, 'payments': 2, 'quotes': 1}
    assert store.quotes['quote-1'].items[0].to_dict()['equipmentId'] == 'eq-ct50-001'


def test_seed_booking_without_hold_window_uses_event_window():
    service = BookingService(load_seed_data(InMemoryStore(), now=NOW))
    legacy = service.get_booking('booking-2')

    assert legacy.hold_window is None
    # Event runs 2024-01-15T12:00Z to 2024-01-16T12:00Z; its 8h margin was never stored
    assert service.check_availability(['eq-ct90-001'], '2024-01-16T12:30:00Z', '2024-01-16T20:00:00Z', 0).available
    assert not service.check_availability(['eq-ct90-001'], '2024-01-16T12:00:00Z', '2024-01-16T20:00:00Z', 0).available


def test_seed_booking_with_hold_window():
    service = BookingService(load_seed_data(InMemoryStore(), now=NOW))
    booking = service.get_booking('booking-1')

    assert booking.to_dict()['holdStart'] == '2024-01-08T06:00:00Z'
    assert booking.to_dict()['holdEnd'] == '2024-01-10T18:00:00Z'


def test_bootstrap_seeds_on_request():
    service = BookingService.bootstrap(settings=RentalSettings(), seed=True)

    assert len(service.list_bookings()) == 2
    assert [client.id for client in service.clients.list()] == ['client-1', 'client-2', 'client-3']
    assert len(service.payments.list()) == 2
    assert service.quotes.get('quote-1').total == 1300


def test_bootstrap_follows_settings():
    assert BookingService.bootstrap(settings=RentalSettings(seed_demo_data=False)).list_bookings() == []
    assert len(BookingService.bootstrap(settings=RentalSettings(seed_demo_data=True)).list_equipment()) == 3


def test_bootstrap_uses_given_store():
    store = InMemoryStore()
    service = BookingService.bootstrap(settings=RentalSettings(), store=store, seed=False)
    service.add_equipment({'id': 'eq-1', 'code': 'CT50-001', 'model': 'CT50'})

    assert service.store is store
    assert store.equipment['eq-1'].status == EquipmentStatus.AVAILABLE


def test_bootstrap_warns_about_inconsistent_quantities(caplog):
    store = InMemoryStore()
    service = BookingService(store)
    service.add_equipment({
        'id': 'eq-1',
        'code': 'CT50-001',
        'model': 'CT50',
        'quantity': {'total': 3, 'available': 1, 'reserved': 0, 'maintenance': 0},
    })
    caplog.clear()

    BookingService.bootstrap(settings=RentalSettings(), store=store, seed=False)

    assert 'CT50-001 quantity does not add up' in caplog.text
