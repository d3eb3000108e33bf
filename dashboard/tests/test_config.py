from __future__ import annotations

import logging

from dashboard.core.config import Settings
from dashboard.core.logging import configure_logging
from dashboard.features.gateway import GatewayConfig


def test_settings_defaults(monkeypatch):
    for name in ("DOCUMENT_API_URL", "AGENT_MANAGER_URL", "USE_MOCK_DATA", "GATEWAY_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.document_api_url == "http://localhost:8000"
    assert settings.agent_manager_api_url == "http://localhost:8001"
    assert settings.use_mock_data is False
    assert settings.gateway_timeout_seconds is None
    assert settings.default_user_id == "test_user"


def test_settings_read_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOCUMENT_API_URL", "https://docs.example.com/")
    monkeypatch.setenv("AGENT_MANAGER_URL", "https://agents.example.com")
    monkeypatch.setenv("USE_MOCK_DATA", "true")
    monkeypatch.setenv("GATEWAY_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("FRONTEND_ORIGINS", "http://a.test, http://b.test,")

    settings = Settings(_env_file=None)
    config = GatewayConfig.from_settings(settings)

    assert settings.frontend_origin_list == ["http://a.test", "http://b.test"]
    assert config.document_api_url == "https://docs.example.com"
    assert config.agent_manager_api_url == "https://agents.example.com"
    assert config.use_mock_data is True
    assert config.timeout_seconds == 12.5


def test_configure_logging_is_idempotent():
    first = configure_logging("DEBUG")
    handlers = list(first.handlers)
    second = configure_logging("warning")

    assert first is second
    assert second.handlers == handlers
    assert second.level == logging.WARNING
