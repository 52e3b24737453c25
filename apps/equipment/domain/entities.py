"""
Equipment Domain Entities

- Equipment: an inventory line item (a model of evaporative cooler and
  how many units of it the company owns), not a physical unit
- EquipmentStatus: aggregate UI-facing status of the line
- EquipmentQuantity: unit breakdown of the line
"""

from dataclasses import dataclass, field
from enum import Enum

from shared.domain.base import Aggregate, ValueObject
from shared.domain.records import RecordMixin, coerce_enum


class EquipmentStatus(Enum):
    """Aggregate status label shown for an equipment line"""
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    MAINTENANCE = 'maintenance'


class EquipmentModel(Enum):
    CT50 = 'CT50'
    CT80 = 'CT80'
    CT90 = 'CT90'


@dataclass(frozen=True)
class EquipmentQuantity(ValueObject):
    """
    Unit breakdown of an equipment line

    total = available + reserved + maintenance is expected to hold, but
    the forms own that invariant; it is reported here, never enforced.
    """
    total: int = 1
    available: int = 1
    reserved: int = 0
    maintenance: int = 0

    @property
    def is_consistent(self) -> bool:
        return self.total == self.available + self.reserved + self.maintenance

    @property
    def bookable(self) -> int:
        """Units that can go out on bookings (everything not in maintenance)"""
        return max(self.total - self.maintenance, 0)

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'available': self.available,
            'reserved': self.reserved,
            'maintenance': self.maintenance,
        }

    @classmethod
    def from_value(cls, value) -> 'EquipmentQuantity':
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(**{key: int(value[key]) for key in ('total', 'available', 'reserved', 'maintenance') if key in value})
        raise ValueError(f"Invalid equipment quantity: {value!r}")


@dataclass(frozen=True)
class Dimensions(ValueObject):
    """Footprint in metres"""
    w: float
    d: float
    h: float

    def to_dict(self) -> dict:
        return {'w': self.w, 'd': self.d, 'h': self.h}


# Technical specifications per model
EQUIPMENT_SPECS = {
    EquipmentModel.CT50: {
        'airflow_m3h': 10000,
        'motor_w': 380,
        'noise_db': 60,
        'tank_l': 100,
        'water_lph': 8,
        'dimensions_m': Dimensions(1.30, 0.80, 0.53),
    },
    EquipmentModel.CT80: {
        'airflow_m3h': 16000,
        'motor_w': 510,
        'noise_db': 60,
        'tank_l': 80,
        'water_lph': None,
        'dimensions_m': Dimensions(1.96, 0.69, 0.43),
    },
    EquipmentModel.CT90: {
        'airflow_m3h': 20000,
        'motor_w': 750,
        'noise_db': 68,
        'tank_l': 150,
        'water_lph': None,
        'dimensions_m': Dimensions(1.52, 0.92, 0.85),
    },
}


@dataclass(eq=False)
class Equipment(RecordMixin, Aggregate):
    """
    Equipment Aggregate Root

    Represents one line of the rental inventory. Bookings reference it by
    id; its ``status`` is toggled by the booking lifecycle and by the
    maintenance screens.
    """

    FIELD_ALIASES = {'lastMaintenance': 'last_maintenance'}

    code: str
    model: EquipmentModel
    name: str = ''
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    quantity: EquipmentQuantity = field(default_factory=EquipmentQuantity)

    # Technical specs, defaulted from EQUIPMENT_SPECS
    airflow_m3h: int | None = None
    motor_w: int | None = None
    voltage: str = '220v'
    frequency_hz: int = 60
    noise_db: int | None = None
    tank_l: int | None = None
    water_lph: int | None = None
    dimensions_m: Dimensions | None = None

    image: str | None = None
    notes: str | None = None
    last_maintenance: str | None = None

    def __post_init__(self):
        self.model = coerce_enum(EquipmentModel, self.model)
        self.status = coerce_enum(EquipmentStatus, self.status)
        for attribute, default in EQUIPMENT_SPECS[self.model].items():
            if getattr(self, attribute) is None:
                setattr(self, attribute, default)
        if not self.name:
            self.name = f"{self.model.value} - Climatizador Evaporativo"

    @classmethod
    def coerce_field(cls, name: str, value):
        if name == 'status':
            return coerce_enum(EquipmentStatus, value)
        if name == 'model':
            return coerce_enum(EquipmentModel, value)
        if name == 'quantity':
            return EquipmentQuantity.from_value(value)
        if name == 'dimensions_m' and isinstance(value, dict):
            return Dimensions(float(value['w']), float(value['d']), float(value['h']))
        return value

    def set_status(self, status) -> bool:
        """
        Change the aggregate status label

        Returns True if the status actually changed.
        Events: EquipmentStatusChanged
        """
        new_status = coerce_enum(EquipmentStatus, status)
        if new_status == self.status:
            return False

        from apps.equipment.domain.events import EquipmentStatusChanged

        old_status = self.status
        self.status = new_status

        self.add_event(EquipmentStatusChanged(
            aggregate_id=self.id,
            equipment_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value
        ))
        return True

    @property
    def in_maintenance(self) -> bool:
        return self.status == EquipmentStatus.MAINTENANCE

    def __str__(self):
        return f"Equipment {self.code} ({self.status.value})"

    def __repr__(self):
        return (
            f"Equipment(id={self.id}, code={self.code}, model={self.model.value}, "
            f"status={self.status.value}, quantity={self.quantity.to_dict()})"
        )
