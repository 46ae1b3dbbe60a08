"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOGGER_NAME = "email_extractor"

# HTTP stack loggers that would drown the search trace at DEBUG level.
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def configure_logging(debug: bool = False) -> None:
    """Configure application logging once for CLI usage.

    Debug mode lowers only this package's logger to DEBUG.
    """
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    get_logger().setLevel(logging.DEBUG if debug else logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger() -> logging.Logger:
    """Return the module logger used across the package."""
    return logging.getLogger(LOGGER_NAME)
