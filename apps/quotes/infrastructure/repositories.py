from apps.quotes.domain.entities import Quote
from shared.infrastructure.repository import InMemoryRepository


class QuoteRepository(InMemoryRepository[Quote]):
    collection_name = 'quotes'
    entity_name = 'Quote'
    entity_class = Quote
