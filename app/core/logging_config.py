# app/core/logging_config.py
"""
Logging configuration for the Meeting Usefulness service.

Configures the standard library logging tree once at application startup,
with the level taken from settings.
"""

import logging
import logging.config
from typing import Any, Dict

from app.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_logging_config(level: str) -> Dict[str, Any]:
    """
    Build a dictConfig mapping that routes every `app.*` logger to stderr.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "app": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Settings | None = None) -> None:
    """
    Apply the logging configuration.

    Unknown level names fall back to INFO.
    """
    settings = settings or get_settings()
    level = (settings.LOG_LEVEL or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    logging.config.dictConfig(build_logging_config(level))
    logging.getLogger(__name__).debug("Logging configured (level=%s)", level)
