"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; this wires stdlib
logging to structlog's ProcessorFormatter so records are rendered as
JSON (prod) or as readable console lines (dev).
"""

import logging.config

import structlog

SHARED_PROCESSORS = [
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]

APP_LOGGERS = ('apps', 'shared', 'config')


def build_logging_config(settings) -> dict:
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": renderer,
                "foreign_pre_chain": SHARED_PROCESSORS,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "level": settings.log_level,
            }
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
        # App loggers propagate to the root console handler
        "loggers": {
            name: {"level": settings.log_level}
            for name in APP_LOGGERS
        },
    }


def configure_logging(settings) -> None:
    """Install structlog and the stdlib logging config for the given settings"""
    structlog.configure(
        processors=SHARED_PROCESSORS + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(build_logging_config(settings))
