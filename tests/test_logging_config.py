"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from jobfilter.logging import ComponentLoggerAdapter, get_logger
from jobfilter.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobfilter.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging installs a root handler; remove it afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (JSONFormatter, KeyValueFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def logger():
    """Create a test logger with no handlers."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    formatter = JSONFormatter()
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    log_obj = json.loads(formatter.format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    formatter = JSONFormatter()
    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Test message",
        (),
        None,
        extra={"event": "matching.posting.classified", "score": 11, "relevant": True},
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "matching.posting.classified"
    assert log_obj["score"] == 11
    assert log_obj["relevant"] is True


def test_json_formatter_serializes_enums_and_lists(logger):
    """Enum members and containers in extras are rendered as JSON values."""
    from jobfilter.domain.models import Assessment

    formatter = JSONFormatter()
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "msg", (), None,
        extra={"assessment": Assessment.RELEVANT, "terms": ("latam", "brazil")},
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["assessment"] == "RELEVANT"
    assert log_obj["terms"] == ["latam", "brazil"]


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_explicit_extra_wins(logger):
    """Explicit extra fields take precedence over context fields."""
    with log_context(posting_id="from-context", source="lever"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "msg", (), None,
            extra={"posting_id": "from-extra"},
        )
        ContextualFilter().filter(record)

    assert record.posting_id == "from-extra"
    assert record.source == "lever"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    formatter = JSONFormatter()
    log_filter = ContextualFilter(service="jobfilter", environment="test")

    with log_context(posting_id="4012345", source="greenhouse"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "Posting relevant", (), None,
            extra={"event": "matching.posting.classified"},
        )
        log_filter.filter(record)
        log_obj = json.loads(formatter.format(record))

    assert log_obj["message"] == "Posting relevant"
    assert log_obj["event"] == "matching.posting.classified"
    assert log_obj["service"] == "jobfilter"
    assert log_obj["environment"] == "test"
    assert log_obj["posting_id"] == "4012345"
    assert log_obj["source"] == "greenhouse"


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter appends extras as sorted key=value pairs."""
    formatter = KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None,
        extra={"event": "test.event", "count": 42, "reason": "US or LatAm", "missing": None},
    )

    output = formatter.format(record)

    assert "[INFO]" in output
    assert "Test message" in output
    assert "event=test.event" in output
    assert "count=42" in output
    assert 'reason="US or LatAm"' in output
    assert "missing=null" in output
    assert output.index("count=") < output.index("event=")


def test_key_value_formatter_skips_static_fields(logger):
    """Service and environment are not repeated on every human-readable line."""
    formatter = KeyValueFormatter("%(message)s")
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "msg", (), None)
    ContextualFilter(service="jobfilter", environment="test").filter(record)

    assert formatter.format(record) == "msg"


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format():
    """Test configure_logging installs a single JSON handler."""
    configure_logging(level="INFO", format_type="json", environment="test")

    root_logger = logging.getLogger()
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
    assert root_logger.level == logging.INFO


def test_configure_logging_key_value_format():
    """Test configure_logging with key-value format."""
    configure_logging(level="debug", format_type="key-value", environment="test")

    root_logger = logging.getLogger()
    assert isinstance(root_logger.handlers[0].formatter, KeyValueFormatter)
    assert root_logger.level == logging.DEBUG


def test_configure_logging_writes_to_stream():
    """Records end up on the configured stream with context fields."""
    stream = io.StringIO()
    configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

    with log_context(posting_id="a1b2c3"):
        get_logger("jobfilter.test", component="matching").info(
            "hello", extra={"event": "test.event"}
        )

    log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert log_obj["message"] == "hello"
    assert log_obj["component"] == "matching"
    assert log_obj["posting_id"] == "a1b2c3"
    assert log_obj["service"] == "jobfilter"


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces ISO-8601 UTC timestamps."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "Test message", (), None)

    timestamp = json.loads(JSONFormatter().format(record))["timestamp"]

    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2026-10-19T10:30:00.123Z


def test_get_logger_component_adapter():
    """get_logger tags records with the component; call extras win."""
    adapter = get_logger("jobfilter.test", component="adapter")
    assert isinstance(adapter, ComponentLoggerAdapter)

    msg, kwargs = adapter.process("msg", {"extra": {"event": "x", "component": "override"}})
    assert kwargs["extra"] == {"component": "override", "event": "x"}

    plain = get_logger("jobfilter.test")
    assert isinstance(plain, logging.Logger)
