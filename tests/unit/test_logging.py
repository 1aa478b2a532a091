"""
Unit tests for logging helpers.
"""

import logging

import pytest

from mongo_models.observability import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    get_logging_context,
    log_operation,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def clean_context():
    yield
    clear_correlation_id()


class TestContext:
    """Test correlation ID context."""

    def test_generated_correlation_id(self):
        correlation_id = set_correlation_id()

        assert correlation_id
        assert get_correlation_id() == correlation_id
        assert get_logging_context()["correlation_id"] == correlation_id

    def test_clear(self):
        set_correlation_id("abc")
        clear_correlation_id()

        assert get_correlation_id() is None
        assert "correlation_id" not in get_logging_context()


class TestLogOperation:
    """Test log_operation."""

    def test_logs_with_context(self, caplog):
        logger = logging.getLogger("mongo_models.tests")
        set_correlation_id("req-1")

        with caplog.at_level(logging.DEBUG, logger="mongo_models.tests"):
            log_operation(logger, "users.find", duration_ms=1.234, returned=2)

        record = caplog.records[-1]
        assert record.getMessage() == "Operation: users.find (duration: 1.23ms)"
        assert record.correlation_id == "req-1"
        assert record.duration_ms == 1.23
        assert record.returned == 2

    def test_failure_message(self, caplog):
        logger = logging.getLogger("mongo_models.tests")

        with caplog.at_level(logging.ERROR, logger="mongo_models.tests"):
            log_operation(logger, "connection.connect", level=logging.ERROR, success=False)

        assert caplog.records[-1].getMessage() == "Operation failed: connection.connect"

    def test_disabled_level_is_skipped(self, caplog):
        logger = logging.getLogger("mongo_models.tests")

        with caplog.at_level(logging.INFO, logger="mongo_models.tests"):
            log_operation(logger, "users.count")

        assert caplog.records == []


class TestContextualLogger:
    def test_adapter_adds_context(self, caplog):
        set_correlation_id("req-2")
        logger = get_logger("mongo_models.tests.adapter")

        with caplog.at_level(logging.INFO, logger="mongo_models.tests.adapter"):
            logger.info("hello", extra={"db_name": "app"})

        record = caplog.records[-1]
        assert record.correlation_id == "req-2"
        assert record.db_name == "app"
