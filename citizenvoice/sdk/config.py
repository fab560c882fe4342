"""Client configuration loaded from ``CITIZENVOICE_*`` environment variables."""
from __future__ import annotations

import logging
from typing import Any, Final
from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_ENVIRONMENTS: Final[tuple[str, ...]] = ("development", "staging", "production")


class ConfigurationError(RuntimeError):
    """Raised when the client configuration is unusable in production."""


class ClientSettings(BaseSettings):
    api_url: str = Field(default="", alias="CITIZENVOICE_API_URL")
    anon_key: str = Field(default="", alias="CITIZENVOICE_ANON_KEY")
    app_env: str = Field(default="development", alias="CITIZENVOICE_APP_ENV")
    request_timeout: float = Field(default=30.0, alias="CITIZENVOICE_REQUEST_TIMEOUT")
    admin_email_domain: str = Field(default="admin.citizenvoice.com", alias="CITIZENVOICE_ADMIN_EMAIL_DOMAIN")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_staging(self) -> bool:
        return self.app_env == "staging"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def find_configuration_problems(settings: ClientSettings) -> list[str]:
    """Return a human-readable description of every invalid setting."""

    problems: list[str] = []
    if not settings.api_url.strip():
        problems.append("Missing required environment variable: CITIZENVOICE_API_URL")
    elif not _is_http_url(settings.api_url.strip()):
        problems.append(f"Invalid URL format for CITIZENVOICE_API_URL: {settings.api_url}")
    if not settings.anon_key.strip():
        problems.append("Missing required environment variable: CITIZENVOICE_ANON_KEY")
    if settings.app_env not in VALID_ENVIRONMENTS:
        problems.append(
            f"Invalid CITIZENVOICE_APP_ENV: {settings.app_env}. Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
        )
    return problems


def load_client_settings(**overrides: Any) -> ClientSettings:
    """Load and validate settings; only production treats problems as fatal."""

    settings = ClientSettings(**overrides)
    problems = find_configuration_problems(settings)
    if not problems:
        return settings

    if settings.is_production:
        raise ConfigurationError("; ".join(problems))

    for problem in problems:
        logger.warning(problem)
    logger.warning("Continuing with invalid client configuration outside production")
    if settings.app_env not in VALID_ENVIRONMENTS:
        settings = settings.model_copy(update={"app_env": "development"})
    return settings


__all__ = [
    "VALID_ENVIRONMENTS",
    "ClientSettings",
    "ConfigurationError",
    "find_configuration_problems",
    "load_client_settings",
]
