"""Production settings for the rental core.

Extends the base settings with JSON log output. Sensitive or
site-specific values must come from environment variables.
"""

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

LOG_JSON = get_bool('LOG_JSON', True)  # noqa: F405

SEED_DEMO_DATA = False
