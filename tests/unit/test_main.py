"""
Unit tests for FastAPI application.
"""

import pytest
from fastapi.testclient import TestClient

from reviewbot.config import Settings
from reviewbot.main import create_app
from reviewbot.services.review_pipeline import ReviewPipeline


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        repository_owner="acme",
        repository_name="web",
        analyzer="pattern",
        file_filter=r"\.ts$",
    )


@pytest.fixture
def client(settings):
    """Create a test client for the FastAPI application."""
    return TestClient(create_app(settings))


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["docs"] == "/docs"


def test_lifespan_builds_pipeline_from_settings(settings):
    """Test startup wires the pipeline and shutdown releases it."""
    app = create_app(settings)

    with TestClient(app):
        pipeline = app.state.review_pipeline
        assert isinstance(pipeline, ReviewPipeline)
        assert pipeline.analyzer.name == "pattern"
        assert pipeline.file_selector.matches("src/index.ts")
        assert pipeline.hosting_client.owner == "acme"
        assert pipeline.hosting_client.repo == "web"

    assert app.state.review_pipeline is None
