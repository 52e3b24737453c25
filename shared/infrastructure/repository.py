"""Generic repository over one collection of the in-memory store"""

from typing import Generic, List, Optional, TypeVar

from shared.domain.exceptions import NotFoundError
from shared.infrastructure.store import InMemoryStore

T = TypeVar('T')


class InMemoryRepository(Generic[T]):
    """
    Repository for records kept in an InMemoryStore collection

    Subclasses set ``collection_name`` and ``entity_name`` (the latter is
    used in NotFoundError messages).
    """

    collection_name: str = ''
    entity_name: str = 'Record'

    def __init__(self, store: InMemoryStore):
        self.store = store

    @property
    def _records(self) -> dict:
        return self.store.collection(self.collection_name)

    def get_by_id(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def get_or_raise(self, record_id: str) -> T:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(self.entity_name, record_id)
        return record

    def list(self) -> List[T]:
        return list(self._records.values())

    def exists(self, record_id: str) -> bool:
        return record_id in self._records

    def save(self, record: T) -> T:
        self._records[record.id] = record
        return record

    def delete(self, record_id: str) -> T:
        record = self.get_or_raise(record_id)
        del self._records[record_id]
        return record

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records.values()))
