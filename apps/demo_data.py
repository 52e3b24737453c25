"""Demo dataset for development and demos.

``load_seed_data`` replaces the contents of a store with three equipment
lines, three clients, two bookings, two payments and a quote. Booking
dates are relative to ``now``. The second booking is stored without a
hold window, the way records saved before hold windows existed look.
"""

from datetime import datetime, timedelta
import logging

from apps.bookings.domain.entities import Booking
from apps.bookings.domain.hold_window import compute_hold_window
from apps.clients.domain.entities import Client
from apps.equipment.domain.entities import Equipment
from apps.finances.domain.entities import Payment
from apps.quotes.domain.entities import Quote
from shared.domain.base import utc_now
from shared.domain.value_objects import format_timestamp

logger = logging.getLogger(__name__)


SEED_CLIENTS = [
    {
        'id': 'client-1',
        'name': 'João Silva',
        'company': 'Silva Eventos',
        'email': 'joao@silvaeventos.com',
        'phone': '(11) 99999-9999',
        'address': 'Rua das Flores, 123 - São Paulo/SP',
        'status': 'active',
        'lastBooking': '2024-01-15',
        'notes': 'Cliente VIP, sempre pontual nos pagamentos',
    },
    {
        'id': 'client-2',
        'name': 'Maria Santos',
        'company': 'Santos Construções',
        'email': 'maria@santosconstrucoes.com',
        'phone': '(11) 88888-8888',
        'address': 'Av. Paulista, 1000 - São Paulo/SP',
        'status': 'active',
        'lastBooking': '2024-01-10',
        'tags': ['corporativo', 'grandes-eventos'],
    },
    {
        'id': 'client-3',
        'name': 'Pedro Costa',
        'company': 'Costa Festas',
        'email': 'pedro@costafestas.com',
        'phone': '(11) 77777-7777',
        'address': 'Rua Augusta, 500 - São Paulo/SP',
        'status': 'inactive',
        'lastBooking': '2023-12-05',
        'notes': 'Verificar pendências financeiras',
    },
]

SEED_EQUIPMENT = [
    {
        'id': 'eq-ct50-001',
        'code': 'CT50-001',
        'model': 'CT50',
        'name': 'CT50 - Climatizador Evaporativo',
        'status': 'available',
        'image': '/equipments/CT50.jpg',
        'quantity': {'total': 15, 'available': 12, 'reserved': 3, 'maintenance': 0},
        'lastMaintenance': '2024-01-10',
        'notes': 'Unidade com melhor eficiência energética',
    },
    {
        'id': 'eq-ct80-001',
        'code': 'CT80-001',
        'model': 'CT80',
        'name': 'CT80 - Climatizador Evaporativo',
        'status': 'available',
        'image': '/equipments/CT80.jpg',
        'quantity': {'total': 12, 'available': 10, 'reserved': 2, 'maintenance': 0},
        'lastMaintenance': '2024-01-05',
        'notes': 'Ideal para eventos médios',
    },
    {
        'id': 'eq-ct90-001',
        'code': 'CT90-001',
        'model': 'CT90',
        'name': 'CT90 - Climatizador Evaporativo',
        'status': 'available',
        'image': '/equipments/CT90.jpeg',
        'quantity': {'total': 8, 'available': 6, 'reserved': 2, 'maintenance': 0},
        'lastMaintenance': '2023-12-20',
        'notes': 'Maior capacidade, para grandes eventos',
    },
]


def seed_bookings(now: datetime) -> list:
    start = now + timedelta(days=7)
    end = start + timedelta(days=2)
    window = compute_hold_window(start, end, 6)

    return [
        {
            'id': 'booking-1',
            'clientId': 'client-1',
            'equipmentIds': ['eq-ct50-001', 'eq-ct80-001'],
            'site': 'Centro de Convenções Anhembi',
            'start': format_timestamp(start),
            'end': format_timestamp(end),
            'marginHours': 6,
            'status': 'scheduled',
            'address': 'Av. Olavo Fontoura, 1209 - Santana, São Paulo/SP',
            'totalPerDay': 800,
            'days': 2,
            'totalAmount': 1600,
            **window.to_dict(),
            'notes': 'Evento corporativo - requer instalação às 6h',
        },
        {
            # Saved without holdStart/holdEnd
            'id': 'booking-2',
            'clientId': 'client-2',
            'equipmentIds': ['eq-ct90-001'],
            'site': 'Espaço Villa Country',
            'start': format_timestamp(now + timedelta(days=14)),
            'end': format_timestamp(now + timedelta(days=15)),
            'marginHours': 8,
            'status': 'scheduled',
            'address': 'Rod. Raposo Tavares, km 22 - Cotia/SP',
            'totalPerDay': 1200,
            'days': 1,
            'totalAmount': 1200,
            'notes': 'Casamento - evento de alta qualidade',
        },
    ]


def seed_payments(now: datetime) -> list:
    return [
        {
            'id': 'payment-1',
            'clientId': 'client-1',
            'bookingId': 'booking-1',
            'date': format_timestamp(now),
            'amount': 800,
            'method': 'pix',
            'status': 'paid',
            'notes': 'Entrada do evento Anhembi',
        },
        {
            'id': 'payment-2',
            'clientId': 'client-2',
            'bookingId': 'booking-2',
            'date': format_timestamp(now),
            'amount': 1200,
            'method': 'boleto',
            'status': 'pending',
            'dueDate': format_timestamp(now + timedelta(days=7)),
            'notes': 'Pagamento evento Villa Country',
        },
    ]


def seed_quotes(now: datetime) -> list:
    return [
        {
            'id': 'quote-1',
            'clientId': 'client-1',
            'bookingId': 'booking-1',
            'title': 'Proposta - Centro de Convenções Anhembi',
            'description': 'Climatização para evento corporativo',
            'items': [
                {'equipmentId': 'eq-ct50-001', 'quantity': 1, 'days': 2, 'dailyRate': 300, 'total': 600},
                {'equipmentId': 'eq-ct80-001', 'quantity': 1, 'days': 2, 'dailyRate': 400, 'total': 800},
            ],
            'subtotal': 1400,
            'discount': 100,
            'taxes': 0,
            'total': 1300,
            'validUntil': format_timestamp(now + timedelta(days=30)),
            'status': 'sent',
            'conditions': 'Instalação inclusa. Manutenção e operação por conta do cliente.',
            'paymentTerms': '50% na confirmação, 50% após o evento',
            'createdAt': format_timestamp(now),
            'updatedAt': format_timestamp(now),
        },
    ]


def load_seed_data(store, now: datetime | None = None):
    """Replace every collection of the store with the demo dataset"""
    now = now or utc_now()

    store.replace('clients', [Client.from_dict(data) for data in SEED_CLIENTS])
    store.replace('equipment', [Equipment.from_dict(data) for data in SEED_EQUIPMENT])
    store.replace('bookings', [Booking.from_dict(data) for data in seed_bookings(now)])
    store.replace('payments', [Payment.from_dict(data) for data in seed_payments(now)])
    store.replace('quotes', [Quote.from_dict(data) for data in seed_quotes(now)])

    logger.info(f"Demo data loaded: {store.counts()}")
    return store
