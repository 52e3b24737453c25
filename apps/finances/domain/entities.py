"""
Finance Domain Entities

Payments are recorded against clients (and optionally bookings). The
rental core stores them; amounts are never computed here.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from shared.domain.base import Entity
from shared.domain.records import RecordMixin, coerce_enum
from shared.domain.value_objects import parse_timestamp


class PaymentMethod(Enum):
    PIX = 'pix'
    BOLETO = 'boleto'
    TRANSFER = 'transfer'
    CASH = 'cash'


class PaymentStatus(Enum):
    """Payment status tracking"""
    PAID = 'paid'
    PENDING = 'pending'
    OVERDUE = 'overdue'


@dataclass(eq=False)
class Payment(RecordMixin, Entity):
    FIELD_ALIASES = {
        'clientId': 'client_id',
        'bookingId': 'booking_id',
        'dueDate': 'due_date',
    }

    client_id: str
    date: datetime
    amount: float
    method: PaymentMethod = PaymentMethod.PIX
    status: PaymentStatus = PaymentStatus.PENDING
    booking_id: str | None = None
    due_date: datetime | None = None
    notes: str | None = None

    def __post_init__(self):
        self.date = parse_timestamp(self.date)
        if self.due_date is not None:
            self.due_date = parse_timestamp(self.due_date)
        self.method = coerce_enum(PaymentMethod, self.method)
        self.status = coerce_enum(PaymentStatus, self.status)

    @classmethod
    def coerce_field(cls, name: str, value):
        if name == 'date':
            return parse_timestamp(value)
        if name == 'due_date':
            return None if value is None else parse_timestamp(value)
        if name == 'method':
            return coerce_enum(PaymentMethod, value)
        if name == 'status':
            return coerce_enum(PaymentStatus, value)
        return value
