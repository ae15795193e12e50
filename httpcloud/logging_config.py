"""
Logging configuration for the HTTP cloud provider.

Request traces from the transport are kept quiet unless asked for, so a busy
scheduler does not log every filter/prioritize round trip.
"""

import logging
import logging.config
from typing import Any, Dict


def get_logging_config(level: str = "INFO", transport_level: str = "WARNING") -> Dict[str, Any]:
    """Get logging configuration for the provider loggers."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "httpcloud": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpcloud.transport": {
                "level": transport_level,
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO", transport_level: str = "WARNING") -> None:
    """Apply the provider logging configuration."""
    logging.config.dictConfig(get_logging_config(level, transport_level))
