from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line carries one of INFO|WARN|ERROR|SUMMARY (DEBUG with --debug) as its
first token so operators and scripts can grep the run output.
"""

__all__ = [
    "SUMMARY_LEVEL",
    "LOGGER_NAME",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "reset_logging",
]

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25
LOGGER_NAME = "order_ingest"

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formats records as ``LABEL message``."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the package logger once (idempotent).

    Child loggers (``order_ingest.storage.api_store`` etc.) propagate into it.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # root への伝播を止めて二重出力を防ぐ
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug(enabled: bool = True) -> None:
    logger = get_logger()
    level = logging.DEBUG if enabled else logging.INFO
    for h in logger.handlers:
        h.setLevel(level)
    logger.setLevel(level)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
