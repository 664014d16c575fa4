import logging
import logging.config
import os
from typing import Dict, Any

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Structured JSON logging configuration.
LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "correlation_id": {
            "()": "asgi_correlation_id.CorrelationIdFilter",
            "uuid_length": 32,
            "default_value": "-",
        },
    },
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["correlation_id"],
            "level": LOG_LEVEL,
        },
    },
    "loggers": {
        "fastapi": {"handlers": ["default"], "level": LOG_LEVEL, "propagate": False},
        "uvicorn": {"handlers": ["default"], "level": LOG_LEVEL, "propagate": False},
        "slowapi": {"handlers": ["default"], "level": "WARNING", "propagate": False},
        "api": {"handlers": ["default"], "level": LOG_LEVEL, "propagate": False},
    },
}

# Module-level logger, will be configured by setup_logging.
logger = logging.getLogger("api")

def setup_logging():
    """
    Applies the logging configuration from the LOGGING_CONFIG dictionary.
    """
    logging.config.dictConfig(LOGGING_CONFIG)
