"""
Application configuration management.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # GitHub
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    repository_owner: str
    repository_name: str
    http_timeout_seconds: float = 30.0

    # Review
    file_filter: str = r"\.jsx?$"
    analyzer: Literal["eslint", "pattern"] = "eslint"
    eslint_command: str = "eslint"
    eslint_cwd: Optional[str] = None
    analyzer_timeout_seconds: float = 60.0
    analyzer_concurrency: int = 4
    pattern_rules_path: Optional[str] = None

    # Application
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once; later calls return the same instance."""
    return Settings()
