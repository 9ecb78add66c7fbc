"""
Review Pipeline component.

Turns a pull request webhook event into inline review comments:
pull request -> commits -> changed files -> selected files -> content ->
findings -> comments anchored at diff positions.

Every commit, file and comment is an independent unit of work. Units run
concurrently and a failure is logged and confined to the unit it happened in;
siblings always run to completion.
"""

import asyncio
from typing import Any, Awaitable, Iterable, List, Optional

from reviewbot.analyzers.base import Analyzer
from reviewbot.models.api_response import ReviewSummary
from reviewbot.models.comment import ReviewComment
from reviewbot.models.pull_request import ChangedFile, Commit, PullRequestRef, parse_pull_request
from reviewbot.services.file_selector import FileSelector
from reviewbot.services.hosting import HostingClient
from reviewbot.services.line_mapper import build_line_map
from reviewbot.utils.logging import (
    ContextLoggerAdapter,
    get_logger,
    log_error_with_context,
    log_review_event,
)

logger = get_logger(__name__)


class ReviewPipeline:
    """Reviews the commits of a pull request and comments on their added lines."""

    def __init__(
        self,
        hosting_client: HostingClient,
        analyzer: Analyzer,
        file_selector: FileSelector,
    ):
        """
        Initialize the pipeline with its collaborators.

        Args:
            hosting_client: Client for the code hosting platform
            analyzer: Static analyzer run on each selected file
            file_selector: Filter deciding which changed files get analyzed
        """
        self.hosting_client = hosting_client
        self.analyzer = analyzer
        self.file_selector = file_selector

    async def handle(self, event: Any) -> Optional[ReviewSummary]:
        """
        Review the pull request referenced by a webhook event.

        Args:
            event: Decoded webhook body

        Returns:
            Summary of what was posted and what failed, or None when the event
            does not reference a pull request (nothing is fetched in that case)
        """
        pull_request = parse_pull_request(event)
        if pull_request is None:
            logger.debug("Event carries no pull request, ignoring")
            return None

        action = event.get("action")
        log = logger.with_context(pr_number=pull_request.number)
        log_review_event(log, pull_request.number, action)

        try:
            commits = await self.hosting_client.list_commits(pull_request.number)
        except Exception as e:
            log_error_with_context(log, f"Failed to list commits for PR #{pull_request.number}", e)
            return ReviewSummary(
                pr_number=pull_request.number,
                errors=[f"list commits: {e}"],
            )

        log.info(f"Reviewing {len(commits)} commits")

        summary = await self._gather(
            pull_request,
            (self._review_commit(pull_request, commit) for commit in commits),
            log,
        )
        summary = summary.merge(ReviewSummary(pr_number=pull_request.number, commits=len(commits)))

        log.info(
            f"Review finished: {summary.comments_posted} comments posted, "
            f"{summary.comments_failed} failed, {summary.findings_unmapped} findings outside the diff",
            extra={
                "files_analyzed": summary.files_analyzed,
                "files_failed": summary.files_failed,
                "error_count": len(summary.errors),
            },
        )
        return summary

    async def _review_commit(self, pull_request: PullRequestRef, commit: Commit) -> ReviewSummary:
        """List, filter and review the files changed by one commit."""
        log = logger.with_context(pr_number=pull_request.number, commit_sha=commit.sha)

        try:
            files = await self.hosting_client.get_commit_files(commit.sha)
        except Exception as e:
            log_error_with_context(log, f"Failed to list files for commit {commit.sha[:8]}", e)
            return ReviewSummary(
                pr_number=pull_request.number,
                errors=[f"commit {commit.sha}: {e}"],
            )

        selected = self.file_selector.select_files(files)
        log.info(f"Selected {len(selected)} of {len(files)} changed files")

        return await self._gather(
            pull_request,
            (self._review_file(pull_request, commit, changed_file) for changed_file in selected),
            log,
        )

    async def _review_file(
        self,
        pull_request: PullRequestRef,
        commit: Commit,
        changed_file: ChangedFile,
    ) -> ReviewSummary:
        """Download, analyze and comment on one file of one commit."""
        filename = changed_file.filename
        log = logger.with_context(
            pr_number=pull_request.number,
            commit_sha=commit.sha,
            filename=filename,
        )

        def failed(stage: str, error: Exception) -> ReviewSummary:
            log_error_with_context(log, f"Failed to {stage} {filename} at {commit.sha[:8]}", error)
            return ReviewSummary(
                pr_number=pull_request.number,
                files_failed=1,
                errors=[f"{filename}@{commit.sha}: {stage}: {error}"],
            )

        if changed_file.status == "removed":
            # Nothing to download at this revision, and no added lines to anchor to
            log.debug(f"Skipping {filename}, removed in {commit.sha[:8]}")
            return ReviewSummary(pr_number=pull_request.number)

        try:
            content = await self.hosting_client.get_file_content(
                filename, commit.sha, raw_url=changed_file.raw_url
            )
        except Exception as e:
            return failed("download", e)

        try:
            line_map = build_line_map(changed_file.patch)
        except ValueError as e:
            return failed("parse patch of", e)

        try:
            findings = await self.analyzer.analyze(content, filename)
        except Exception as e:
            return failed("analyze", e)

        comments: List[ReviewComment] = []
        unmapped = 0
        for finding in findings:
            position = line_map.get(finding.line)
            if position is None:
                # Not an added line of this commit, GitHub would reject the anchor
                unmapped += 1
                continue
            comments.append(
                ReviewComment.from_finding(
                    pr_number=pull_request.number,
                    filename=filename,
                    commit_sha=commit.sha,
                    position=position,
                    finding=finding,
                )
            )

        log.info(
            f"{self.analyzer.name} reported {len(findings)} findings, "
            f"{len(comments)} on added lines"
        )

        results = await asyncio.gather(
            *(self._publish_comment(comment, log) for comment in comments),
        )
        errors = [error for error in results if error is not None]

        return ReviewSummary(
            pr_number=pull_request.number,
            files_analyzed=1,
            comments_posted=len(results) - len(errors),
            comments_failed=len(errors),
            findings_unmapped=unmapped,
            errors=errors,
        )

    async def _publish_comment(self, comment: ReviewComment, log: ContextLoggerAdapter) -> Optional[str]:
        """
        Submit one comment.

        Returns:
            None on success, otherwise a description of the failure
        """
        try:
            await self.hosting_client.create_comment(
                comment.pr_number,
                comment.commit_sha,
                comment.filename,
                comment.position,
                comment.body,
            )
        except Exception as e:
            log_error_with_context(
                log,
                f"Failed to publish comment for {comment.filename} at position {comment.position}",
                e,
            )
            return f"{comment.filename}@{comment.commit_sha}:{comment.position} - {e}"
        return None

    async def _gather(
        self,
        pull_request: PullRequestRef,
        units: Iterable[Awaitable[ReviewSummary]],
        log: ContextLoggerAdapter,
    ) -> ReviewSummary:
        """
        Run units of work concurrently and merge their summaries.

        A unit that raises despite its own error handling is recorded as an
        error; it never cancels the others.
        """
        summary = ReviewSummary(pr_number=pull_request.number)
        results = await asyncio.gather(*units, return_exceptions=True)

        for result in results:
            if isinstance(result, Exception):
                log_error_with_context(log, "Review unit failed unexpectedly", result)
                summary = summary.merge(
                    ReviewSummary(pr_number=pull_request.number, errors=[f"unexpected: {result}"])
                )
            elif isinstance(result, BaseException):
                # CancelledError and friends are not ours to swallow
                raise result
            else:
                summary = summary.merge(result)

        return summary
