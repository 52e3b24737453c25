"""
Record Service

Add/update/delete/get/list for the plain record collections (clients,
payments, quotes). Changes run inside a unit of work and are announced
with RecordChanged events.
"""

from dataclasses import dataclass
from typing import List
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


@dataclass
class RecordChanged(DomainEvent):
    """
    Event: A record was added, updated or deleted

    action is one of 'added', 'updated', 'deleted'.
    """
    collection: str
    action: str
    record_id: str


class RecordService:
    """CRUD over one repository"""

    def __init__(self, repository, uow_factory):
        self.repository = repository
        self.uow_factory = uow_factory

    @property
    def collection(self) -> str:
        return self.repository.collection_name

    def add(self, data: dict):
        with self.uow_factory() as uow:
            record = self.repository.entity_class.from_dict(data)
            if self.repository.exists(record.id):
                raise ValueError(f"{self.repository.entity_name} {record.id} already exists")
            self.repository.save(record)
            self._announce(uow, 'added', record.id)
        logger.info(f"{self.repository.entity_name} added: {record.id}")
        return record

    def update(self, record_id: str, changes: dict):
        with self.uow_factory() as uow:
            record = self.repository.get_or_raise(record_id)
            changed = record.apply_changes(changes)
            self.repository.save(record)
            if changed:
                self._announce(uow, 'updated', record.id)
        return record

    def delete(self, record_id: str):
        with self.uow_factory() as uow:
            self.repository.delete(record_id)
            self._announce(uow, 'deleted', record_id)
        logger.info(f"{self.repository.entity_name} deleted: {record_id}")

    def get(self, record_id: str):
        return self.repository.get_or_raise(record_id)

    def list(self) -> List:
        return self.repository.list()

    def _announce(self, uow, action: str, record_id: str):
        uow.collect_event(RecordChanged(
            aggregate_id=record_id,
            collection=self.collection,
            action=action,
            record_id=record_id
        ))
