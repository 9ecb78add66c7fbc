"""Review comment data models."""

from pydantic import BaseModel, ConfigDict

from reviewbot.models.finding import Finding


class ReviewComment(BaseModel):
    """Inline comment anchored to a diff position of one file in one commit."""

    model_config = ConfigDict(frozen=True)

    pr_number: int
    filename: str
    commit_sha: str
    position: int
    body: str

    @classmethod
    def from_finding(
        cls,
        pr_number: int,
        filename: str,
        commit_sha: str,
        position: int,
        finding: Finding,
    ) -> "ReviewComment":
        return cls(
            pr_number=pr_number,
            filename=filename,
            commit_sha=commit_sha,
            position=position,
            body=format_comment_body(finding),
        )


def format_comment_body(finding: Finding) -> str:
    """Render a finding as markdown, rule id in bold."""
    return f"**{finding.rule_id}**: {finding.message}"
