"""
Runtime configuration helpers for the FastAPI application.

Loads DATABASE_URL and the rest of the backend settings from the environment,
falling back to the .env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)

AppEnvironment = Literal["development", "staging", "production"]


class Settings(BaseSettings):
    # Required; read from the environment or .env
    database_url: str = Field(..., alias="DATABASE_URL")

    app_env: AppEnvironment = Field(default="development", alias="APP_ENV")
    app_name: str = Field(default="CitizenVoice Backend", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Project key sent by every client in the ``apikey`` header
    anon_key: str | None = Field(default=None, alias="ANON_KEY")

    jwt_secret_key: str | None = Field(default=None, alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")

    # OpenAI proxy functions
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_chat_model: str = Field(default="gpt-4o-mini", alias="OPENAI_CHAT_MODEL")
    openai_transcribe_model: str = Field(default="whisper-1", alias="OPENAI_TRANSCRIBE_MODEL")
    openai_timeout: float = Field(default=60.0, alias="OPENAI_TIMEOUT")

    # S3-compatible object storage
    storage_key: str | None = Field(default=None, alias="STORAGE_KEY")
    storage_secret: str | None = Field(default=None, alias="STORAGE_SECRET")
    storage_region: str | None = Field(default=None, alias="STORAGE_REGION")
    storage_endpoint: str | None = Field(default=None, alias="STORAGE_ENDPOINT")
    storage_public_url: str | None = Field(default=None, alias="STORAGE_PUBLIC_URL")
    max_upload_mb: int = Field(default=10, alias="MAX_UPLOAD_MB")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["AppEnvironment", "Settings", "get_settings"]
