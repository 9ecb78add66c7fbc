"""Data models for the review bot."""

from .api_response import ReviewSummary, WebhookResponse
from .comment import ReviewComment, format_comment_body
from .finding import DEFAULT_RULE_ID, Finding, FindingSeverity
from .pull_request import ChangedFile, Commit, PullRequestRef, parse_pull_request

__all__ = [
    # Pull request models
    "PullRequestRef",
    "Commit",
    "ChangedFile",
    "parse_pull_request",
    # Analyzer models
    "DEFAULT_RULE_ID",
    "Finding",
    "FindingSeverity",
    # Comment models
    "ReviewComment",
    "format_comment_body",
    # API response models
    "WebhookResponse",
    "ReviewSummary",
]
