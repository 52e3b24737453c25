"""Settings package for the rental core.

This package exposes multiple environment-specific settings modules. The
``base.py`` contains common configuration shared across environments.
The ``dev.py`` and ``prod.py`` modules extend base settings with
environment specific overrides. ``load_settings`` picks one of them
(``RENTAL_ENV``, default ``dev``) and freezes it into a RentalSettings.
"""

from dataclasses import dataclass, fields, replace
import importlib
import os

from config.exceptions import ImproperlyConfigured

ENVIRONMENTS = ('dev', 'prod')

CONFLICT_POLICIES = ('line', 'quantity')
EQUIPMENT_STATUS_POLICIES = ('toggle', 'derived')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class RentalSettings:
    environment: str = 'dev'
    debug: bool = False
    default_margin_hours: float = 6
    min_margin_hours: float = 6
    max_margin_hours: float = 8
    booking_conflict_policy: str = 'line'
    equipment_status_policy: str = 'toggle'
    seed_demo_data: bool = False
    log_level: str = 'INFO'
    log_json: bool = False

    def __post_init__(self):
        if self.booking_conflict_policy not in CONFLICT_POLICIES:
            raise ImproperlyConfigured(
                f"BOOKING_CONFLICT_POLICY must be one of {CONFLICT_POLICIES}, "
                f"got {self.booking_conflict_policy!r}"
            )
        if self.equipment_status_policy not in EQUIPMENT_STATUS_POLICIES:
            raise ImproperlyConfigured(
                f"EQUIPMENT_STATUS_POLICY must be one of {EQUIPMENT_STATUS_POLICIES}, "
                f"got {self.equipment_status_policy!r}"
            )
        if self.log_level not in LOG_LEVELS:
            raise ImproperlyConfigured(f"Unknown LOG_LEVEL: {self.log_level!r}")
        if self.default_margin_hours < 0:
            raise ImproperlyConfigured("DEFAULT_MARGIN_HOURS cannot be negative")
        if self.min_margin_hours > self.max_margin_hours:
            raise ImproperlyConfigured("MIN_MARGIN_HOURS cannot exceed MAX_MARGIN_HOURS")

    @classmethod
    def from_module(cls, module, environment: str) -> 'RentalSettings':
        values = {'environment': environment}
        for item in fields(cls):
            constant = item.name.upper()
            if hasattr(module, constant):
                values[item.name] = getattr(module, constant)
        return cls(**values)

    def with_overrides(self, **overrides) -> 'RentalSettings':
        return replace(self, **overrides)


def load_settings(environment: str | None = None, **overrides) -> RentalSettings:
    """
    Build settings for an environment

    Args:
        environment: 'dev' or 'prod'; defaults to RENTAL_ENV, then 'dev'
        overrides: field values that win over the settings module
    """
    environment = (environment or os.environ.get('RENTAL_ENV') or 'dev').lower()
    if environment not in ENVIRONMENTS:
        raise ImproperlyConfigured(f"Unknown RENTAL_ENV {environment!r}, expected one of {ENVIRONMENTS}")

    module = importlib.import_module(f'config.settings.{environment}')
    settings = RentalSettings.from_module(module, environment)
    if overrides:
        settings = settings.with_overrides(**overrides)
    return settings
