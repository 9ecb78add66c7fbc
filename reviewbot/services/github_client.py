"""
GitHub client.

Implements the hosting interface over the GitHub REST API for a single
repository: pull request commits, commit files, file contents and inline
pull request review comments.
"""

import base64
import binascii
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from reviewbot.models.pull_request import ChangedFile, Commit
from reviewbot.services.hosting import HostingClient, HostingError
from reviewbot.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_ACCEPT_HEADER = "application/vnd.github+json"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_USER_AGENT = "reviewbot/0.1.0"

# GitHub caps per_page at 100 for list endpoints
PAGE_SIZE = 100


class GitHubAPIError(HostingError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubClient(HostingClient):
    """
    GitHub REST API client scoped to one repository.

    Every request is logged with its duration and status. Failures raise
    GitHubAPIError and are never retried here; the next webhook delivery
    re-triggers the review.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: Optional[str] = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            token: Token for authentication; anonymous when None
            base_url: GitHub API base URL (GitHub Enterprise uses /api/v3)
            timeout: Request timeout in seconds
            user_agent: User-Agent header; GitHub rejects requests without one
            client: Optional pre-configured httpx client (tests use MockTransport)
        """
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")

        headers = {
            "Accept": DEFAULT_ACCEPT_HEADER,
            "X-GitHub-Api-Version": DEFAULT_API_VERSION,
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )
        if client is not None:
            self._client.headers.update(headers)

        logger.info(f"GitHubClient initialized for repository: {self.owner}/{self.repo}")

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        """
        Send a request, log it, and return the successful response.

        Raises:
            GitHubAPIError: On transport errors or HTTP errors
        """
        start_time = time.time()
        try:
            response = await self._client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            duration_ms = (time.time() - start_time) * 1000
            log_api_call(logger, "github", url, method, duration_ms=duration_ms, error=str(e))
            raise GitHubAPIError(f"GitHub API request to {url} failed: {e}") from e

        duration_ms = (time.time() - start_time) * 1000

        if response.status_code >= 400:
            detail: Any = None
            if response.content:
                try:
                    detail = response.json()
                except ValueError:
                    detail = response.text
            log_api_call(
                logger,
                "github",
                url,
                method,
                status_code=response.status_code,
                duration_ms=duration_ms,
                error=f"HTTP {response.status_code}",
            )
            raise GitHubAPIError(
                f"GitHub API request to {url} failed with status {response.status_code}.",
                response.status_code,
                detail,
            )

        log_api_call(
            logger,
            "github",
            url,
            method,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            GitHubAPIError: On transport errors, HTTP errors or non-JSON bodies
        """
        response = await self._send(method, url, params=params, json=json)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub API returned invalid JSON for {url}.",
                response.status_code,
                response.text,
            ) from e

    async def list_commits(self, pr_number: int) -> List[Commit]:
        """
        List every commit of a pull request, following pagination.

        Args:
            pr_number: Pull request number

        Returns:
            Commits in the order GitHub returns them
        """
        url = f"{self._repo_path}/pulls/{pr_number}/commits"
        commits: List[Commit] = []
        page = 1

        while True:
            data = await self._request("GET", url, params={"per_page": PAGE_SIZE, "page": page})
            if not isinstance(data, list):
                raise GitHubAPIError(f"Unexpected commit listing for PR #{pr_number}", response_body=data)

            commits.extend(Commit(sha=item["sha"]) for item in data)
            if len(data) < PAGE_SIZE:
                break
            page += 1

        logger.info(f"Retrieved {len(commits)} commits for PR #{pr_number}", extra={"pr_number": pr_number})
        return commits

    async def get_commit_files(self, sha: str) -> List[ChangedFile]:
        """
        List the files changed by a commit.

        Args:
            sha: Commit SHA

        Returns:
            Changed files with their patches (patch is None for binary files)
        """
        data = await self._request("GET", f"{self._repo_path}/commits/{sha}")
        if not isinstance(data, dict):
            raise GitHubAPIError(f"Unexpected commit payload for {sha}", response_body=data)

        files = [
            ChangedFile(
                filename=item["filename"],
                patch=item.get("patch"),
                raw_url=item.get("raw_url"),
                status=item.get("status"),
            )
            for item in data.get("files") or []
        ]

        logger.debug(f"Commit {sha[:8]} changed {len(files)} files", extra={"commit_sha": sha})
        return files

    async def get_file_content(self, filename: str, sha: str, raw_url: Optional[str] = None) -> str:
        """
        Download a file at a commit through the contents API.

        Files over 1 MB come back with encoding "none" and no inline content;
        those are fetched from the commit's raw URL instead.

        Args:
            filename: Path of the file in the repository
            sha: Commit SHA to read the file at
            raw_url: Raw download location listed with the commit's files

        Returns:
            The decoded file content

        Raises:
            GitHubAPIError: If the file is missing, not a file, or not decodable
        """
        url = f"{self._repo_path}/contents/{quote(filename)}"
        data = await self._request("GET", url, params={"ref": sha})

        if not isinstance(data, dict) or "content" not in data:
            raise GitHubAPIError(f"No content returned for {filename} at {sha[:8]}", response_body=data)

        encoding = data.get("encoding", "base64")
        if encoding == "none":
            download_url = raw_url or data.get("download_url")
            if not download_url:
                raise GitHubAPIError(f"No download location for large file {filename}", response_body=data)
            content = await self._download(download_url, filename)
        elif encoding == "base64":
            try:
                # GitHub wraps base64 content at 60 columns
                raw = base64.b64decode(data["content"].replace("\n", ""))
                content = raw.decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise GitHubAPIError(f"Could not decode content of {filename}: {e}") from e
        else:
            raise GitHubAPIError(f"Unsupported content encoding '{encoding}' for {filename}")

        logger.debug(f"Retrieved {len(content)} characters for {filename}", extra={"filename": filename})
        return content

    async def _download(self, url: str, filename: str) -> str:
        """Fetch a file body from its raw download URL."""
        response = await self._send("GET", url)
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GitHubAPIError(f"Could not decode content of {filename}: {e}") from e

    async def create_comment(
        self,
        pr_number: int,
        sha: str,
        filename: str,
        position: int,
        body: str,
    ) -> None:
        """
        Post an inline review comment on a pull request.

        Args:
            pr_number: Pull request number
            sha: Commit the position refers to
            filename: Path of the file being commented on
            position: Line offset within the file's patch
            body: Markdown comment body
        """
        await self._request(
            "POST",
            f"{self._repo_path}/pulls/{pr_number}/comments",
            json={
                "body": body,
                "commit_id": sha,
                "path": filename,
                "position": position,
            },
        )

        logger.debug(
            f"Published comment on {filename} at position {position}",
            extra={"pr_number": pr_number, "commit_sha": sha, "filename": filename},
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client:
            await self._client.aclose()
