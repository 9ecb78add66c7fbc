"""
Webhook endpoints for GitHub pull request events.
"""

from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Request

from reviewbot.dependencies import get_review_pipeline
from reviewbot.models.api_response import WebhookResponse
from reviewbot.models.pull_request import parse_pull_request
from reviewbot.services.review_pipeline import ReviewPipeline
from reviewbot.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


async def run_review(pipeline: ReviewPipeline, payload: Any) -> None:
    """
    Review a pull request in the background.

    The webhook has already been acknowledged, so failures end here, logged.

    Args:
        pipeline: Review pipeline to run
        payload: Decoded webhook body
    """
    try:
        await pipeline.handle(payload)
    except Exception as e:
        logger.error(f"Error reviewing pull request in background: {e}", exc_info=True)


@router.post("/github", response_model=WebhookResponse)
async def handle_github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    pipeline: ReviewPipeline = Depends(get_review_pipeline),
    x_github_event: Optional[str] = Header(None, alias="X-GitHub-Event"),
) -> WebhookResponse:
    """
    Receive GitHub webhook deliveries.

    This endpoint:
    1. Parses the JSON body
    2. Ignores anything that does not reference a pull request
    3. Schedules the review as a background task
    4. Returns 200 OK immediately, without waiting for the review

    Args:
        request: FastAPI request object
        background_tasks: FastAPI background tasks
        pipeline: Review pipeline
        x_github_event: GitHub event name header, logged only

    Returns:
        WebhookResponse with status and message
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.info("Ignoring webhook with a body that is not JSON")
        return WebhookResponse(status="ignored", message="Body is not valid JSON")

    pull_request = parse_pull_request(payload)
    if pull_request is None:
        logger.info(f"Ignoring event without a pull request: {x_github_event or 'unknown'}")
        return WebhookResponse(
            status="ignored",
            message="Event does not reference a pull request",
        )

    logger.info(
        f"Received {x_github_event or 'unknown'} event for PR #{pull_request.number}",
        extra={"pr_number": pull_request.number},
    )

    background_tasks.add_task(run_review, pipeline, payload)

    return WebhookResponse(
        status="accepted",
        message=f"Pull request #{pull_request.number} accepted for review",
    )
