"""
Tests for structured JSON logging configuration.

This module tests:
- JSONFormatter (JSON log output)
- setup_logging() (logging configuration)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import io
import json
import logging

import pytest

from serviflex.core.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def json_logger():
    logger = logging.getLogger("test_json_logger")
    logger.setLevel(logging.INFO)
    logger.handlers = []
    logger.propagate = False

    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers = []


class TestJSONFormatter:
    """Tests for JSON log formatter."""

    def test_json_formatter_basic_message(self, json_logger):
        """
        Test JSONFormatter outputs valid JSON.

        Arrange: Logger with JSONFormatter
        Act: Log a message
        Assert: Output is valid JSON with required fields
        """
        # Arrange
        logger, stream = json_logger

        # Act
        logger.info("Test message")

        # Assert
        log_data = json.loads(stream.getvalue().strip())
        assert log_data["level"] == "INFO"
        assert log_data["message"] == "Test message"
        assert log_data["logger"] == "test_json_logger"
        assert "timestamp" in log_data

    def test_json_formatter_context_fields(self, json_logger):
        # Arrange
        logger, stream = json_logger

        # Act
        logger.info(
            "Document created",
            extra={"collection": "appointments", "document_id": "a1", "request_id": "r1"},
        )

        # Assert
        log_data = json.loads(stream.getvalue().strip())
        assert log_data["collection"] == "appointments"
        assert log_data["document_id"] == "a1"
        assert log_data["request_id"] == "r1"

    def test_json_formatter_custom_extra_and_exception(self, json_logger):
        # Arrange
        logger, stream = json_logger

        # Act
        try:
            raise ValueError("bad slot")
        except ValueError:
            logger.error("Booking failed", extra={"professional_id": "p1"}, exc_info=True)

        # Assert
        log_data = json.loads(stream.getvalue().strip())
        assert log_data["professional_id"] == "p1"
        assert "ValueError: bad slot" in log_data["exception"]


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_setup_logging_installs_single_handler(self):
        # Arrange
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level

        try:
            # Act
            setup_logging(level="DEBUG", json_format=True)

            # Assert
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert logging.getLogger("google").level == logging.WARNING
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_get_logger_returns_named_logger(self):
        assert get_logger("serviflex.test").name == "serviflex.test"
