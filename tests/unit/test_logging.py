"""
Unit tests for structured logging utilities.
"""

import json
import logging
from io import StringIO

import pytest

from reviewbot.utils.logging import (
    JSONFormatter,
    get_logger,
    log_api_call,
    log_error_with_context,
    log_review_event,
)


@pytest.fixture
def captured():
    """Attach a JSON handler to a fresh logger and return (adapter, stream)."""
    logger = get_logger("test_reviewbot_logging")
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.DEBUG)
    logger.logger.propagate = False
    yield logger, stream
    logger.logger.removeHandler(handler)


def read_records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_json_formatter(captured):
    """Test JSON formatter produces valid JSON output."""
    logger, stream = captured

    logger.info("Test message", extra={"pr_number": 42, "commit_sha": "abc123"})

    (log_data,) = read_records(stream)
    assert "timestamp" in log_data
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_reviewbot_logging"
    assert log_data["message"] == "Test message"
    assert log_data["pr_number"] == 42
    assert log_data["commit_sha"] == "abc123"
    assert "source" in log_data


def test_get_logger_with_context():
    """Test getting logger with context."""
    logger = get_logger("test_module", pr_number=42, commit_sha="abc123")

    assert logger.extra["pr_number"] == 42
    assert logger.extra["commit_sha"] == "abc123"


def test_with_context_binds_filename(captured):
    """The reviewed filename does not clash with LogRecord.filename."""
    logger, stream = captured

    logger.with_context(pr_number=7).with_context(filename="src/app.js").info("Analyzing")

    (log_data,) = read_records(stream)
    assert log_data["pr_number"] == 7
    assert log_data["filename"] == "src/app.js"
    assert log_data["source"]["file"].endswith(".py")


def test_filename_in_extra(captured):
    logger, stream = captured

    logger.info("Downloaded", extra={"filename": "lib/util.js"})

    (log_data,) = read_records(stream)
    assert log_data["filename"] == "lib/util.js"


def test_log_review_event(captured):
    """Test pull request event logging."""
    logger, stream = captured

    log_review_event(logger, pr_number=123, action="synchronize")

    (log_data,) = read_records(stream)
    assert log_data["pr_number"] == 123
    assert log_data["context"]["action"] == "synchronize"


def test_log_api_call(captured):
    """Test API call logging."""
    logger, stream = captured

    log_api_call(
        logger,
        service="github",
        endpoint="/repos/acme/web/pulls/123/commits",
        method="GET",
        status_code=200,
        duration_ms=150.5,
    )

    (log_data,) = read_records(stream)
    assert log_data["level"] == "INFO"
    assert log_data["context"]["service"] == "github"
    assert log_data["context"]["status_code"] == 200
    assert log_data["context"]["duration_ms"] == 150.5


def test_log_api_call_with_error(captured):
    """Test API call logging with error."""
    logger, stream = captured

    log_api_call(
        logger,
        service="github",
        endpoint="/repos/acme/web/pulls/123/comments",
        method="POST",
        error="HTTP 422",
    )

    (log_data,) = read_records(stream)
    assert log_data["level"] == "ERROR"
    assert log_data["context"]["error"] == "HTTP 422"


def test_log_error_with_context(captured):
    logger, stream = captured

    try:
        raise RuntimeError("analyzer crashed")
    except RuntimeError as e:
        log_error_with_context(logger, "Failed to analyze", e, stage="analyze")

    (log_data,) = read_records(stream)
    assert log_data["level"] == "ERROR"
    assert log_data["error"]["type"] == "RuntimeError"
    assert "analyzer crashed" in log_data["error"]["stack_trace"]
    assert log_data["context"]["stage"] == "analyze"
