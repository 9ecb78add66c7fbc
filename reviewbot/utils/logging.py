"""
Structured logging utilities with JSON formatting and context injection.

This module provides:
- JSON formatted log output, one object per line
- Review context (pr_number, commit_sha, filename) bound via LoggerAdapter
- Helpers for the log lines every review emits (webhook receipt, API calls, errors)
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from logging import LogRecord
from typing import Any, Dict, MutableMapping, Optional


# Context fields promoted to the top level of each JSON record
PROMOTED_FIELDS = ("pr_number", "commit_sha", "filename", "request_id")

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    [
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName",
    ]
)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON with standard fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - pr_number / commit_sha / filename: review context, when bound
    - context: any other extra fields
    - error: exception details, when exc_info is set
    """

    def format(self, record: LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # LogRecord already owns a `filename` attribute (the source file), so the
        # reviewed file travels as `review_filename` and is renamed on output.
        review_filename = getattr(record, "review_filename", None)
        if review_filename is not None:
            log_data["filename"] = review_filename

        for field in PROMOTED_FIELDS:
            if field != "filename" and hasattr(record, field):
                log_data[field] = getattr(record, field)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
            and key not in PROMOTED_FIELDS
            and key != "review_filename"
        }
        if extra_fields:
            log_data["context"] = extra_fields

        if record.exc_info:
            log_data["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stack_trace": "".join(traceback.format_exception(*record.exc_info)),
            }

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


def _normalize_context(context: Dict[str, Any]) -> Dict[str, Any]:
    """Move `filename` out of the way of LogRecord's own attribute."""
    if "filename" in context:
        context = dict(context)
        context["review_filename"] = context.pop("filename")
    return context


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects context fields into all log records.

    The review pipeline binds pr_number, then commit_sha, then filename as it
    descends into each unit of work, so every line it logs says where it came from.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, _normalize_context(extra or {}))

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        extra = _normalize_context(dict(kwargs.get("extra") or {}))
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextLoggerAdapter":
        """
        Create a new logger adapter with additional context.

        Args:
            **context: Additional context fields

        Returns:
            New logger adapter with merged context
        """
        new_extra = dict(self.extra)
        new_extra.update(_normalize_context(context))
        return ContextLoggerAdapter(self.logger, new_extra)


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level = log_level.upper()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Get a context-aware logger for a module.

    Example:
        logger = get_logger(__name__, pr_number=42)
        logger.info("Reviewing pull request")  # carries pr_number
    """
    return ContextLoggerAdapter(logging.getLogger(name), context)


def log_review_event(logger: logging.LoggerAdapter, pr_number: int, action: Optional[str] = None) -> None:
    """Log receipt of a pull request webhook that will be reviewed."""
    logger.info(
        f"Pull request event received for #{pr_number}",
        extra={"pr_number": pr_number, "action": action},
    )


def log_api_call(
    logger: logging.LoggerAdapter,
    service: str,
    endpoint: str,
    method: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None,
) -> None:
    """
    Log a hosting platform API call with request/response details.

    Args:
        logger: Logger to use
        service: Service name (e.g., 'github')
        endpoint: API endpoint
        method: HTTP method
        status_code: Response status code (if available)
        duration_ms: Request duration in milliseconds (if available)
        error: Error message (if request failed)
    """
    extra: Dict[str, Any] = {
        "service": service,
        "endpoint": endpoint,
        "method": method,
    }

    if status_code is not None:
        extra["status_code"] = status_code
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    if error is not None:
        extra["error"] = error

    if error:
        logger.error(f"API call failed: {method} {endpoint}", extra=extra)
    else:
        logger.info(f"API call: {method} {endpoint}", extra=extra)


def log_error_with_context(
    logger: logging.LoggerAdapter,
    message: str,
    error: BaseException,
    **context: Any,
) -> None:
    """Log an error with its stack trace and any extra context."""
    logger.error(
        message,
        extra=context,
        exc_info=(type(error), error, error.__traceback__),
    )
