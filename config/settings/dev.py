"""Development settings for the rental core.

Extends the base settings with debug output, console log rendering and
the demo dataset. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

LOG_LEVEL = get_env('LOG_LEVEL', 'DEBUG').upper()  # noqa: F405
LOG_JSON = get_bool('LOG_JSON', False)  # noqa: F405

SEED_DEMO_DATA = get_bool('SEED_DEMO_DATA', True)  # noqa: F405
