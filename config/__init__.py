"""Top-level configuration package for the rental core.

Contains the environment-specific settings modules and the logging
setup shared by every entry point that embeds the core. Entry points
call ``setup()`` once before building a BookingService.
"""


def setup(environment=None, **overrides):
    """Load settings for the environment and configure logging"""
    from config.logging_conf import configure_logging
    from config.settings import load_settings

    settings = load_settings(environment, **overrides)
    configure_logging(settings)
    return settings
