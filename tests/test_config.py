"""Tests for environment-driven settings."""

import pytest

from orderhub.core.config import EnvironmentMode, Settings


def test_defaults():
    settings = Settings()

    assert settings.is_development
    assert settings.api_port == 8000
    assert settings.cors_origins_list == ["*"]


def test_production_hides_error_details():
    settings = Settings(env_mode="PRODUCTION", debug=False)

    assert settings.env_mode == EnvironmentMode.PRODUCTION
    assert settings.is_production
    assert not settings.expose_error_details


def test_debug_exposes_error_details_anywhere():
    assert Settings(env_mode="staging", debug=True).expose_error_details


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("API_HOST", "127.0.0.1")
    monkeypatch.setenv("API_PORT", "9001")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings()

    assert (settings.api_host, settings.api_port) == ("127.0.0.1", 9001)
    assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


def test_unknown_env_mode_is_rejected():
    with pytest.raises(ValueError):
        Settings(env_mode="moon")
