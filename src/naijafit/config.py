"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    storage_backend: Literal["file", "supabase"] = "file"
    data_path: Path = Path("data")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    timezone: str = "Africa/Lagos"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
