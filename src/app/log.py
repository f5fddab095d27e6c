from __future__ import annotations

import logging
import logging.config
import sys

LOGGER_NAMES = ("app", "core", "infra")
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", stream=None) -> None:
    """Send app/core/infra log records to one stream handler (stderr by default)."""
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "stream": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": stream or sys.stderr,
            },
        },
        "loggers": {
            name: {"level": level, "handlers": ["stream"], "propagate": False}
            for name in LOGGER_NAMES
        },
    }
    logging.config.dictConfig(logging_config)
