"""Environment-driven settings via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aumai_slacksearch.gateway import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """Process-wide settings read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Slack
    slack_bot_token: str = Field(default="", validate_default=True)
    slack_api_base_url: str = DEFAULT_API_BASE_URL
    slack_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"

    @field_validator("slack_bot_token", mode="before")
    @classmethod
    def require_token(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ValueError("SLACK_BOT_TOKEN environment variable is required")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
