"""Base settings for all environments.

This module defines the settings shared by the development and
production environments of the rental core. Values are read from the
environment (a ``.env`` file at the project root is loaded first via
python-dotenv). Environment-specific overrides live in ``dev.py`` and
``prod.py``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from config.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(BASE_DIR / '.env')


# Helper to get environment variables or raise
def get_env(var_name: str, default=None, required: bool = False):
    value = os.environ.get(var_name, default)
    if required and value in (None, ""):
        raise ImproperlyConfigured(f"Missing required environment variable: {var_name}")
    return value


def get_float(var_name: str, default: float) -> float:
    value = get_env(var_name, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(f"{var_name} must be a number, got {value!r}") from None


def get_bool(var_name: str, default: bool = False) -> bool:
    return str(get_env(var_name, str(default))).strip().lower() in ('1', 'true', 'yes', 'on')


DEBUG = get_bool('RENTAL_DEBUG', False)

# Booking safety margin (hours added before start and after end).
# The forms offer MIN..MAX; the core does not clamp.
DEFAULT_MARGIN_HOURS = get_float('DEFAULT_MARGIN_HOURS', 6)
MIN_MARGIN_HOURS = get_float('MIN_MARGIN_HOURS', 6)
MAX_MARGIN_HOURS = get_float('MAX_MARGIN_HOURS', 8)

# 'line': any overlap on a shared equipment line is a conflict
# 'quantity': only overlaps that exceed the line's bookable units
BOOKING_CONFLICT_POLICY = get_env('BOOKING_CONFLICT_POLICY', 'line')

# 'toggle': create -> reserved, delete -> available
# 'derived': recomputed from active bookings
EQUIPMENT_STATUS_POLICY = get_env('EQUIPMENT_STATUS_POLICY', 'toggle')

# Load the demo dataset into a freshly bootstrapped store
SEED_DEMO_DATA = get_bool('SEED_DEMO_DATA', False)

# Logging
LOG_LEVEL = get_env('LOG_LEVEL', 'INFO').upper()
LOG_JSON = get_bool('LOG_JSON', False)
