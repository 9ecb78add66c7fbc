"""
Hosting platform interface.

The review pipeline only talks to the hosting platform through this interface,
so a test double or another platform can be swapped in without touching it.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from reviewbot.models.pull_request import ChangedFile, Commit


class HostingError(Exception):
    """Base exception for hosting platform failures."""
    pass


class HostingClient(ABC):
    """Operations the review pipeline needs from the code hosting platform."""

    @abstractmethod
    async def list_commits(self, pr_number: int) -> List[Commit]:
        """
        List the commits of a pull request.

        Raises:
            HostingError: If the commits cannot be retrieved
        """
        pass

    @abstractmethod
    async def get_commit_files(self, sha: str) -> List[ChangedFile]:
        """
        List the files changed by a commit, with their patches.

        Raises:
            HostingError: If the commit cannot be retrieved
        """
        pass

    @abstractmethod
    async def get_file_content(self, filename: str, sha: str, raw_url: Optional[str] = None) -> str:
        """
        Download a file's decoded content at a revision.

        ``raw_url`` is the raw download location listed with the commit's
        files, used when the platform does not return the content inline.

        Raises:
            HostingError: If the file cannot be retrieved or decoded
        """
        pass

    @abstractmethod
    async def create_comment(
        self,
        pr_number: int,
        sha: str,
        filename: str,
        position: int,
        body: str,
    ) -> None:
        """
        Post an inline review comment at a diff position.

        Raises:
            HostingError: If the platform rejects the comment
        """
        pass

    async def aclose(self) -> None:
        """Release any network resources held by the client."""
        return None
