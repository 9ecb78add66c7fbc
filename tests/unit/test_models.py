"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from reviewbot.models import (
    Finding,
    PullRequestRef,
    ReviewComment,
    ReviewSummary,
    parse_pull_request,
)


class TestParsePullRequest:

    def test_pull_request_event(self):
        event = {"action": "opened", "number": 3, "pull_request": {"number": 3, "title": "Fix"}}

        assert parse_pull_request(event) == PullRequestRef(number=3)

    @pytest.mark.parametrize(
        "event",
        [
            {},
            {"ref": "refs/heads/main", "commits": []},
            {"pull_request": "3"},
            {"pull_request": {"id": 99}},
            {"pull_request": {"number": 3.0}},
            {"pull_request": {"number": False}},
            ["pull_request"],
            None,
        ],
    )
    def test_anything_else_is_none(self, event):
        assert parse_pull_request(event) is None


class TestFinding:

    def test_rule_id_defaults_to_generic_label(self):
        assert Finding(message="Parsing error", line=1).rule_id == "Eslint"

    def test_frozen(self):
        finding = Finding(message="m", line=1)

        with pytest.raises(ValidationError):
            finding.line = 2


class TestReviewComment:

    def test_from_finding_renders_body(self):
        finding = Finding(rule_id="no-console", message="Unexpected console statement.", line=4)

        comment = ReviewComment.from_finding(
            pr_number=12, filename="src/a.js", commit_sha="abc", position=3, finding=finding
        )

        assert comment.body == "**no-console**: Unexpected console statement."
        assert comment.position == 3
        assert comment.commit_sha == "abc"


class TestReviewSummary:

    def test_merge_adds_counters(self):
        left = ReviewSummary(pr_number=1, files_analyzed=1, comments_posted=2, errors=["a"])
        right = ReviewSummary(pr_number=1, files_failed=1, comments_failed=1, findings_unmapped=4, errors=["b"])

        merged = left.merge(right)

        assert merged.files_analyzed == 1
        assert merged.files_failed == 1
        assert merged.comments_posted == 2
        assert merged.comments_failed == 1
        assert merged.findings_unmapped == 4
        assert merged.errors == ["a", "b"]
        assert not merged.success

    def test_merge_leaves_operands_untouched(self):
        left = ReviewSummary(pr_number=1, errors=["a"])

        left.merge(ReviewSummary(pr_number=1, errors=["b"]))

        assert left.errors == ["a"]
        assert ReviewSummary(pr_number=1).success
