"""
Utility modules for the review bot.
"""

from reviewbot.utils.logging import (
    ContextLoggerAdapter,
    JSONFormatter,
    get_logger,
    setup_logging,
    log_review_event,
    log_api_call,
    log_error_with_context,
)

__all__ = [
    "ContextLoggerAdapter",
    "JSONFormatter",
    "get_logger",
    "setup_logging",
    "log_review_event",
    "log_api_call",
    "log_error_with_context",
]
