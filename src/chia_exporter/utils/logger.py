"""Structured JSON logging configuration."""

import logging
import sys
from pythonjsonlogger.json import JsonFormatter

from ..version import __version__

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logger(name: str = "chia_exporter", level: str = "INFO") -> logging.Logger:
    """
    Configure structured JSON logging.

    Every record carries the exporter version. Fields passed through
    ``extra`` (``rpc_path``, ``wallet_id``) become top-level JSON keys.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    formatter = JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s',
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"exporter_version": __version__},
        timestamp=True
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    if level.upper() != "DEBUG":
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
