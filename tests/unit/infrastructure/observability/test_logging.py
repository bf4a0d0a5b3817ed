"""Tests for structured logging."""

import json
import logging
import sys

import pytest

from playdeck.domain.exceptions import ServiceUnavailableError
from playdeck.infrastructure.observability import (
    configure_logging,
    get_correlation_id,
    log_operation,
    log_slow_operation,
    set_correlation_id,
)
from playdeck.infrastructure.observability.logging import (
    CompactExceptionFormatter,
    CorrelationIdFilter,
    CustomJsonFormatter,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put back whatever handlers the test runner had installed."""
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestCorrelationId:
    """Test correlation ID functionality."""

    def test_set_and_get_correlation_id(self):
        """Test setting and getting correlation ID."""
        test_id = "test-123-abc"
        result = set_correlation_id(test_id)
        assert result == test_id
        assert get_correlation_id() == test_id

    def test_set_correlation_id_generates_uuid_when_none(self):
        """Test that setting None generates a UUID."""
        result = set_correlation_id(None)
        assert len(result) == 36
        assert get_correlation_id() == result

    def test_filter_adds_correlation_id(self):
        """Test that the filter stamps the current ID on records."""
        set_correlation_id("cid-1")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "cid-1"


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_debug_level(self):
        """Test configuring logging with DEBUG level."""
        configure_logging(log_level="DEBUG", json_format=False)
        logger = logging.getLogger("test")
        assert logger.getEffectiveLevel() <= logging.DEBUG

    def test_configure_logging_info_level(self):
        """Test configuring logging with INFO level."""
        configure_logging(log_level="INFO", json_format=False)
        logger = logging.getLogger("test")
        assert logger.getEffectiveLevel() == logging.INFO

    def test_configure_logging_json_format(self):
        """Test configuring logging with JSON format."""
        configure_logging(log_level="INFO", json_format=True)
        root_logger = logging.getLogger()
        assert isinstance(root_logger.handlers[-1].formatter, CustomJsonFormatter)

    def test_repeated_configuration_does_not_stack_handlers(self):
        """Test that calling configure_logging twice leaves one handler."""
        configure_logging(log_level="INFO")
        configure_logging(log_level="INFO")
        assert len(logging.getLogger().handlers) == 1

    def test_logs_go_to_stderr(self):
        """Test that stdout stays free for command output."""
        configure_logging(log_level="INFO")
        handler = logging.getLogger().handlers[0]
        assert handler.stream is sys.stderr

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(log_level="LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_http_libraries_are_quieted(self):
        """Test that httpx request logs are raised to WARNING."""
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING


class TestFormatters:
    """Test the text and JSON formatters."""

    def test_compact_formatter_shows_chain_root_first(self):
        formatter = CompactExceptionFormatter()
        try:
            try:
                raise ConnectionError("refused")
            except ConnectionError as e:
                raise ServiceUnavailableError("GET /search failed", "catalog") from e
        except ServiceUnavailableError:
            text = formatter.formatException(sys.exc_info())

        lines = [line for line in text.splitlines() if line.startswith("╰─►")]
        assert lines == [
            "╰─► ConnectionError: refused",
            "╰─► ServiceUnavailableError: catalog: GET /search failed",
        ]

    def test_json_formatter_fields(self):
        set_correlation_id("cid-json")
        formatter = CustomJsonFormatter("%(message)s")
        record = logging.LogRecord(
            "playdeck.test", logging.WARNING, __file__, 10, "hello %s", ("world",), None
        )
        CorrelationIdFilter().filter(record)

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "hello world"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "playdeck.test"
        assert payload["correlation_id"] == "cid-json"
        assert payload["location"].endswith(":10")


class TestLogOperation:
    """Test the timed operation context manager."""

    async def test_logs_completed_with_duration(self, caplog):
        logger = logging.getLogger("playdeck.test.ops")
        with caplog.at_level(logging.DEBUG, logger="playdeck.test.ops"):
            async with log_operation(logger, "bulk_add", track_count=3):
                pass

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["bulk_add.started", "bulk_add.completed"]
        completed = caplog.records[-1]
        assert completed.track_count == 3
        assert completed.duration_ms >= 0

    async def test_logs_failed_and_reraises(self, caplog):
        logger = logging.getLogger("playdeck.test.ops")
        with caplog.at_level(logging.DEBUG, logger="playdeck.test.ops"):
            with pytest.raises(ServiceUnavailableError):
                async with log_operation(logger, "playlist_read"):
                    raise ServiceUnavailableError("down", "player")

        failed = caplog.records[-1]
        assert failed.getMessage() == "playlist_read.failed"
        assert failed.levelno == logging.ERROR
        assert failed.error_type == "ServiceUnavailableError"

    def test_slow_operation_warns_over_threshold(self, caplog):
        logger = logging.getLogger("playdeck.test.slow")
        with caplog.at_level(logging.WARNING, logger="playdeck.test.slow"):
            log_slow_operation(logger, "artist_index_build", 1500, entries=10)
            log_slow_operation(logger, "album_index_build", 20)

        assert len(caplog.records) == 1
        assert caplog.records[0].operation == "artist_index_build"
