"""
Quote Domain Entities
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from shared.domain.base import Entity, ValueObject
from shared.domain.records import RecordMixin, coerce_enum
from shared.domain.value_objects import parse_timestamp


class QuoteStatus(Enum):
    DRAFT = 'draft'
    SENT = 'sent'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
    EXPIRED = 'expired'


@dataclass(frozen=True)
class QuoteItem(ValueObject):
    equipment_id: str
    quantity: int
    days: int
    daily_rate: float
    total: float

    def to_dict(self) -> dict:
        return {
            'equipmentId': self.equipment_id,
            'quantity': self.quantity,
            'days': self.days,
            'dailyRate': self.daily_rate,
            'total': self.total,
        }

    @classmethod
    def from_value(cls, value) -> 'QuoteItem':
        if isinstance(value, cls):
            return value
        return cls(
            equipment_id=value.get('equipmentId', value.get('equipment_id')),
            quantity=value['quantity'],
            days=value['days'],
            daily_rate=value.get('dailyRate', value.get('daily_rate')),
            total=value['total'],
        )


@dataclass(eq=False)
class Quote(RecordMixin, Entity):
    FIELD_ALIASES = {
        'clientId': 'client_id',
        'bookingId': 'booking_id',
        'validUntil': 'valid_until',
        'paymentTerms': 'payment_terms',
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
    }

    client_id: str
    title: str
    valid_until: datetime
    items: List[QuoteItem] = field(default_factory=list)
    subtotal: float = 0
    discount: float = 0
    taxes: float = 0
    total: float = 0
    status: QuoteStatus = QuoteStatus.DRAFT
    booking_id: str | None = None
    description: str | None = None
    conditions: str | None = None
    payment_terms: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        self.valid_until = parse_timestamp(self.valid_until)
        self.items = [QuoteItem.from_value(item) for item in self.items]
        self.status = coerce_enum(QuoteStatus, self.status)
        for name in ('created_at', 'updated_at'):
            value = getattr(self, name)
            if value is not None:
                setattr(self, name, parse_timestamp(value))

    @classmethod
    def coerce_field(cls, name: str, value):
        if name in ('valid_until', 'created_at', 'updated_at'):
            return None if value is None else parse_timestamp(value)
        if name == 'items':
            return [QuoteItem.from_value(item) for item in value]
        if name == 'status':
            return coerce_enum(QuoteStatus, value)
        return value
