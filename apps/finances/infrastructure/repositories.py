from apps.finances.domain.entities import Payment
from shared.infrastructure.repository import InMemoryRepository


class PaymentRepository(InMemoryRepository[Payment]):
    collection_name = 'payments'
    entity_name = 'Payment'
    entity_class = Payment
