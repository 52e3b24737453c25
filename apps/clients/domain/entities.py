"""
Client Domain Entities
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from shared.domain.base import Entity
from shared.domain.records import RecordMixin, coerce_enum


class ClientType(Enum):
    PERSON = 'person'
    COMPANY = 'company'


class ClientStatus(Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'


class ClientPaymentStatus(Enum):
    CURRENT = 'current'
    PENDING = 'pending'
    OVERDUE = 'overdue'
    RECURRENT = 'recurrent'


@dataclass(eq=False)
class Client(RecordMixin, Entity):
    """
    A renting customer (person or company)

    ``safety_margin_hours`` is the client's preferred margin, used by the
    booking form as the default for new bookings.
    """

    FIELD_ALIASES = {
        'clientType': 'client_type',
        'cellPhone': 'cell_phone',
        'zipCode': 'zip_code',
        'installationAddress': 'installation_address',
        'preferredEquipment': 'preferred_equipment',
        'safetyMarginHours': 'safety_margin_hours',
        'accessNotes': 'access_notes',
        'technicalNotes': 'technical_notes',
        'isVip': 'is_vip',
        'preferredContact': 'preferred_contact',
        'paymentStatus': 'payment_status',
        'creditLimit': 'credit_limit',
        'paymentTerms': 'payment_terms',
        'lastBooking': 'last_booking',
    }

    name: str
    client_type: ClientType = ClientType.PERSON
    company: str | None = None
    doc: str | None = None

    email: str | None = None
    phone: str | None = None
    cell_phone: str | None = None
    whatsapp: str | None = None
    preferred_contact: str = 'phone'

    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    installation_address: str | None = None

    preferred_equipment: str | None = None
    safety_margin_hours: float = 6
    access_notes: str | None = None
    technical_notes: str | None = None
    is_vip: bool = False

    payment_status: ClientPaymentStatus = ClientPaymentStatus.CURRENT
    credit_limit: float | None = None
    payment_terms: int = 0

    status: ClientStatus = ClientStatus.ACTIVE
    notes: str | None = None
    tags: List[str] = field(default_factory=list)
    last_booking: str | None = None

    def __post_init__(self):
        self.client_type = coerce_enum(ClientType, self.client_type)
        self.status = coerce_enum(ClientStatus, self.status)
        self.payment_status = coerce_enum(ClientPaymentStatus, self.payment_status)

    @classmethod
    def coerce_field(cls, name: str, value):
        if name == 'client_type':
            return coerce_enum(ClientType, value)
        if name == 'status':
            return coerce_enum(ClientStatus, value)
        if name == 'payment_status':
            return coerce_enum(ClientPaymentStatus, value)
        return value

    def __str__(self):
        return self.company or self.name
