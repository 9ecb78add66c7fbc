"""Pull request, commit and changed-file data models."""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class PullRequestRef(BaseModel):
    """Pull request a webhook event asks us to review."""

    model_config = ConfigDict(frozen=True)

    number: int


class Commit(BaseModel):
    """One revision within the pull request."""

    model_config = ConfigDict(frozen=True)

    sha: str


class ChangedFile(BaseModel):
    """A file touched by a commit, as listed by the hosting platform."""

    model_config = ConfigDict(frozen=True)

    filename: str
    patch: Optional[str] = None  # absent for binary and rename-only changes
    raw_url: Optional[str] = None
    status: Optional[str] = None  # 'added', 'modified', 'removed', 'renamed', ...


def parse_pull_request(event: Any) -> Optional[PullRequestRef]:
    """
    Extract the pull request reference from a webhook body.

    Anything that is not shaped like ``{"pull_request": {"number": <int>}}``
    yields None; unrelated events are acknowledged and ignored, not rejected.
    """
    if not isinstance(event, Mapping):
        return None

    pull_request = event.get("pull_request")
    if not isinstance(pull_request, Mapping):
        return None

    number = pull_request.get("number")
    # bool is an int subclass; a JSON true is not a pull request number
    if not isinstance(number, int) or isinstance(number, bool):
        return None

    return PullRequestRef(number=number)
