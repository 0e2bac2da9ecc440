"""Logging configuration."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "K8S_REPORT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or __name__)

    # Only configure if no handlers exist
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper())

    return logger


def set_log_level(level: int) -> None:
    """Apply a log level to every logger created through get_logger."""
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("k8s_report"):
            logging.getLogger(name).setLevel(level)
