"""FastAPI dependency factories."""

from fastapi import HTTPException, Request

from reviewbot.services.review_pipeline import ReviewPipeline
from reviewbot.utils.logging import get_logger

logger = get_logger(__name__)


def get_review_pipeline(request: Request) -> ReviewPipeline:
    """Provide the review pipeline built at application startup."""
    pipeline = getattr(request.app.state, "review_pipeline", None)
    if pipeline is None:
        logger.error("Review pipeline requested before application startup completed")
        raise HTTPException(status_code=503, detail="Review pipeline not initialized")
    return pipeline
