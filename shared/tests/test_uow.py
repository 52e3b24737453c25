import pytest

from apps.clients.domain.entities import Client
from apps.clients.infrastructure.repositories import ClientRepository
from shared.application.message_bus import MessageBus
from shared.application.records import RecordChanged, RecordService
from shared.application.uow import InMemoryUnitOfWork
from shared.domain.base import DomainEvent
from shared.domain.exceptions import NotFoundError


@pytest.fixture
def bus():
    return MessageBus()


@pytest.fixture
def published(bus):
    events = []
    bus.register_event_handler(DomainEvent, events.append)
    return events


def test_commit_publishes_collected_events(store, bus, published):
    event = RecordChanged(collection='clients', action='added', record_id='c-1')

    with InMemoryUnitOfWork(store, bus) as uow:
        uow.collect_event(event)
        assert published == []

    assert published == [event]


def test_error_restores_snapshot_and_drops_events(store, bus, published):
    repo = ClientRepository(store)
    repo.save(Client(id='c-1', name='Before'))

    with pytest.raises(RuntimeError):
        with InMemoryUnitOfWork(store, bus) as uow:
            repo.get_or_raise('c-1').name = 'After'
            repo.save(Client(id='c-2', name='New'))
            uow.collect_event(RecordChanged(collection='clients', action='added', record_id='c-2'))
            raise RuntimeError('boom')

    assert repo.get_or_raise('c-1').name == 'Before'
    assert not repo.exists('c-2')
    assert published == []


def test_failing_event_handler_keeps_commit(store, bus):
    def explode(event):
        raise RuntimeError('subscriber down')

    bus.register_event_handler(RecordChanged, explode)
    service = RecordService(ClientRepository(store), lambda: InMemoryUnitOfWork(store, bus))

    client = service.add({'id': 'c-1', 'name': 'Acme'})

    assert service.get('c-1') is client


class TestRecordService:
    @pytest.fixture
    def clients(self, store, bus):
        return RecordService(ClientRepository(store), lambda: InMemoryUnitOfWork(store, bus))

    def test_add_update_delete(self, clients, published):
        clients.add({'id': 'c-1', 'name': 'Acme', 'safetyMarginHours': 8})
        updated = clients.update('c-1', {'email': 'ops@acme.test'})
        assert updated.email == 'ops@acme.test'
        assert updated.safety_margin_hours == 8

        clients.delete('c-1')

        assert clients.list() == []
        assert [event.action for event in published] == ['added', 'updated', 'deleted']

    def test_duplicate_id(self, clients):
        clients.add({'id': 'c-1', 'name': 'Acme'})
        with pytest.raises(ValueError):
            clients.add({'id': 'c-1', 'name': 'Other'})

    def test_unknown_field_on_update(self, clients):
        clients.add({'id': 'c-1', 'name': 'Acme'})
        with pytest.raises(ValueError):
            clients.update('c-1', {'favouriteColour': 'blue'})

    def test_missing_record(self, clients):
        with pytest.raises(NotFoundError):
            clients.update('missing', {'name': 'x'})
        with pytest.raises(NotFoundError):
            clients.delete('missing')


def test_rollback_keeps_record_identity(store, bus):
    repo = ClientRepository(store)
    kept = repo.save(Client(id='c-1', name='Before'))

    with pytest.raises(RuntimeError):
        with InMemoryUnitOfWork(store, bus):
            kept.name = 'After'
            repo.delete('c-1')
            raise RuntimeError('boom')

    assert repo.get_or_raise('c-1') is kept
    assert kept.name == 'Before'


def test_bad_value_leaves_record_untouched():
    client = Client(id='c-1', name='Acme')

    with pytest.raises(ValueError):
        client.apply_changes({'name': 'Renamed', 'status': 'dormant'})

    assert client.name == 'Acme'
