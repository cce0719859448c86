"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_bucket: str = "sessions"
    gemini_api_key: str = ""
    image_model: str = "gemini-3-pro-image-preview"
    image_model_timeout_seconds: float = 180.0
    openai_api_key: str | None = None
    openai_suggestion_model: str = "gpt-4.1-mini"
    gemini_suggestion_model: str = "gemini-3-flash-preview"
    swatch_dir: Path = Path("static/swatches")
    dashboard_token: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
