"""Business logic services package."""

from reviewbot.services.file_selector import DEFAULT_FILE_FILTER, FileSelector
from reviewbot.services.github_client import GitHubAPIError, GitHubClient
from reviewbot.services.hosting import HostingClient, HostingError
from reviewbot.services.line_mapper import PatchParseError, build_line_map
from reviewbot.services.review_pipeline import ReviewPipeline

__all__ = [
    'DEFAULT_FILE_FILTER',
    'FileSelector',
    'GitHubAPIError',
    'GitHubClient',
    'HostingClient',
    'HostingError',
    'PatchParseError',
    'build_line_map',
    'ReviewPipeline',
]
