# app/utils/logger.py

import logging


def get_logger(name: str) -> logging.Logger:
    """
    Namespaced application logger. Handlers and levels come from
    app.core.logging.setup_logging(); nothing is configured here.
    """
    return logging.getLogger(f"status_workflow.{name}")
