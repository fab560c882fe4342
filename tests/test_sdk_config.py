from __future__ import annotations

import logging

import pytest

from citizenvoice.sdk import ConfigurationError, load_client_settings
from citizenvoice.sdk.config import ClientSettings, find_configuration_problems


def test_valid_settings_have_no_problems() -> None:
    settings = ClientSettings(api_url="https://api.citizenvoice.example", anon_key="anon", app_env="staging")

    assert find_configuration_problems(settings) == []
    assert settings.is_staging and not settings.is_production


def test_every_problem_is_listed() -> None:
    settings = ClientSettings(api_url="ftp://files", anon_key=" ", app_env="qa")

    assert find_configuration_problems(settings) == [
        "Invalid URL format for CITIZENVOICE_API_URL: ftp://files",
        "Missing required environment variable: CITIZENVOICE_ANON_KEY",
        "Invalid CITIZENVOICE_APP_ENV: qa. Must be one of: development, staging, production",
    ]


def test_production_refuses_bad_configuration() -> None:
    with pytest.raises(ConfigurationError, match="CITIZENVOICE_API_URL"):
        load_client_settings(api_url="", anon_key="anon", app_env="production")


def test_development_warns_and_continues(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    settings = load_client_settings(api_url="", anon_key="", app_env="development")

    assert settings.is_development
    assert "Missing required environment variable: CITIZENVOICE_API_URL" in caplog.text
    assert "Missing required environment variable: CITIZENVOICE_ANON_KEY" in caplog.text


def test_unknown_environment_falls_back_to_development(caplog: pytest.LogCaptureFixture) -> None:
    settings = load_client_settings(api_url="https://api.example", anon_key="anon", app_env="qa")

    assert settings.app_env == "development"
    assert "Invalid CITIZENVOICE_APP_ENV" in caplog.text


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CITIZENVOICE_API_URL", "https://env.example")
    monkeypatch.setenv("CITIZENVOICE_ANON_KEY", "from-env")
    monkeypatch.setenv("CITIZENVOICE_REQUEST_TIMEOUT", "12.5")

    settings = load_client_settings()

    assert settings.api_url == "https://env.example"
    assert settings.anon_key == "from-env"
    assert settings.request_timeout == 12.5
    assert settings.admin_email_domain == "admin.citizenvoice.com"
