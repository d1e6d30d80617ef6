"""
Application configuration management.

Values come from the environment (GitHub Actions exports most of them) or a
local ``.env`` file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # GitHub API
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    request_timeout_seconds: float = 30.0

    # Actions runtime context
    github_repository: Optional[str] = None  # owner/repo
    github_server_url: str = "https://github.com"
    github_workflow: Optional[str] = None
    github_run_id: Optional[int] = None
    github_event_path: Optional[str] = None

    # Message
    nightly_link_url: str = "https://nightly.link"
    comment_purpose: str = "nightly-link"

    # Webhook
    webhook_secret: Optional[str] = None

    # Application
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
