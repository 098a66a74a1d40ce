import logging
import sys
from logging.config import dictConfig
from app.core.config import LOG_LEVEL, LOG_SQL


def setup_logging():
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,

            # -----------------
            # FORMATTERS
            # -----------------
            "formatters": {
                "default": {
                    "format": (
                        "%(asctime)s | %(levelname)s | "
                        "%(name)s | %(message)s"
                    ),
                },
                "access": {
                    "format": (
                        "%(asctime)s | ACCESS | %(request_id)s | "
                        "%(client_addr)s | %(method)s | "
                        "%(path)s | %(status_code)s | "
                        "%(process_time_ms)sms"
                    ),
                },
            },

            # -----------------
            # HANDLERS
            # -----------------
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
                "access_console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "access",
                },
            },

            # -----------------
            # LOGGERS
            # -----------------
            "loggers": {
                # Used by request_logging_middleware
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                # Workflow engine: registry edits, gate decisions, transitions
                "status_workflow": {
                    "level": LOG_LEVEL,
                    "propagate": True,
                },
                "apscheduler": {
                    "level": "WARNING",
                },
                # Statement logging is opt-in through LOG_SQL
                "sqlalchemy.engine": {
                    "level": "INFO" if LOG_SQL else "WARNING",
                },
                # Replaced by the access logger above
                "uvicorn.access": {
                    "level": "WARNING",
                    "propagate": False,
                },
            },

            # -----------------
            # ROOT LOGGER
            # -----------------
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["console"],
            },
        }
    )
    logging.getLogger("status_workflow").debug("Logging configured (level=%s)", LOG_LEVEL)
