"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from reviewbot import __version__
from reviewbot.analyzers import get_analyzer
from reviewbot.api import webhooks
from reviewbot.config import Settings, get_settings
from reviewbot.services.file_selector import FileSelector
from reviewbot.services.github_client import GitHubClient
from reviewbot.services.review_pipeline import ReviewPipeline
from reviewbot.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_review_pipeline(settings: Settings) -> ReviewPipeline:
    """Wire the review pipeline from settings."""
    hosting_client = GitHubClient(
        owner=settings.repository_owner,
        repo=settings.repository_name,
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.http_timeout_seconds,
    )
    return ReviewPipeline(
        hosting_client=hosting_client,
        analyzer=get_analyzer(settings),
        file_selector=FileSelector(settings.file_filter),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the review pipeline on startup and release it on shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        f"Starting review bot for {settings.repository_owner}/{settings.repository_name}",
        extra={"analyzer": settings.analyzer, "file_filter": settings.file_filter},
    )

    pipeline = build_review_pipeline(settings)
    app.state.review_pipeline = pipeline
    try:
        yield
    finally:
        logger.info("Shutting down review bot")
        await pipeline.hosting_client.aclose()
        app.state.review_pipeline = None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()

    # Configure structured logging
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Review Bot",
        description="Posts static analysis findings as inline pull request comments",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Review Bot API",
            "version": __version__,
            "docs": "/docs",
        }

    app.include_router(webhooks.router)
    return app


app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
