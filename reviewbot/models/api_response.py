"""API response data models."""

from typing import List

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Response from webhook handler."""

    status: str
    message: str


class ReviewSummary(BaseModel):
    """Outcome of reviewing one webhook event, merged from every unit of work."""

    pr_number: int
    commits: int = 0
    files_analyzed: int = 0
    files_failed: int = 0
    comments_posted: int = 0
    comments_failed: int = 0
    findings_unmapped: int = 0
    errors: List[str] = []

    def merge(self, other: "ReviewSummary") -> "ReviewSummary":
        """Return a new summary adding up both sets of counters."""
        return ReviewSummary(
            pr_number=self.pr_number,
            commits=self.commits + other.commits,
            files_analyzed=self.files_analyzed + other.files_analyzed,
            files_failed=self.files_failed + other.files_failed,
            comments_posted=self.comments_posted + other.comments_posted,
            comments_failed=self.comments_failed + other.comments_failed,
            findings_unmapped=self.findings_unmapped + other.findings_unmapped,
            errors=self.errors + other.errors,
        )

    @property
    def success(self) -> bool:
        return not self.errors
