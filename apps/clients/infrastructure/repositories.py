from apps.clients.domain.entities import Client
from shared.infrastructure.repository import InMemoryRepository


class ClientRepository(InMemoryRepository[Client]):
    collection_name = 'clients'
    entity_name = 'Client'
    entity_class = Client
