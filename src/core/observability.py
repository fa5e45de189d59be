"""Logging compartido para el cliente.

Usage example:
    from core.observability import get_logger

    logger = get_logger("adapters.http_client")
    logger.debug("Response envelope: %s", envelope)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    """Return a logger with a single stream handler and UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).
        level: Initial level, only applied the first time the logger is configured.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger


def set_level(level: str | int, *names: str) -> None:
    """Ajusta el nivel de los loggers indicados (p.ej. desde `AppSettings.log_level`)."""

    for name in names:
        logging.getLogger(name).setLevel(level)
