from __future__ import annotations

import logging
from io import StringIO

from order_ingest.logging.init import (
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == "order_ingest"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_idempotent():
    assert setup_logging() is setup_logging()
    assert len(get_logger().handlers) == 1


def test_logging_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_order_ingest_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_set_debug_lowers_levels():
    logger = setup_logging()
    set_debug(True)
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    set_debug(False)
    assert logger.level == logging.INFO


def test_child_logger_output_goes_through_package_logger(capsys):
    setup_logging()
    logging.getLogger("order_ingest.services.orchestrator").warning("child message")
    assert "WARN child message" in capsys.readouterr().out
