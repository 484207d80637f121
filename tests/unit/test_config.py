"""Unit tests for settings and the shared providers."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from assistant_relay import __version__
from assistant_relay.config import RelaySettings
from assistant_relay.dependencies import get_assistants_client, get_settings


def test_default_settings(monkeypatch):
    """Test that default settings are loaded correctly."""
    for name in ("RELAY_POLL_INTERVAL", "RELAY_ALLOWLIST_PATH", "RELAY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = RelaySettings()

    assert settings.allowlist_path == "allowed_assistants.json"
    assert settings.poll_interval == 1.0
    assert settings.poll_max_attempts is None
    assert settings.poll_backoff == 1.0
    assert settings.exit_command == "exit"
    assert settings.new_command == "new"
    assert settings.attachment_tool == "code_interpreter"
    assert settings.cancel_runs_on_interrupt is True
    assert settings.delete_threads_on_end is False
    assert settings.log_level == "WARNING"


def test_settings_from_environment(monkeypatch):
    """Test that settings can be overridden via environment variables."""
    monkeypatch.setenv("RELAY_POLL_INTERVAL", "0.5")
    monkeypatch.setenv("RELAY_POLL_MAX_ATTEMPTS", "30")
    monkeypatch.setenv("RELAY_ALLOWLIST_PATH", "/etc/relay/allowed.json")
    monkeypatch.setenv("RELAY_VERIFY_SHARED_RESOURCES", "true")

    settings = RelaySettings()

    assert settings.poll_interval == 0.5
    assert settings.poll_max_attempts == 30
    assert settings.resolved_allowlist_path == Path("/etc/relay/allowed.json")
    assert settings.verify_shared_resources is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"poll_interval": -1},
        {"poll_backoff": 0.5},
        {"poll_max_attempts": 0},
        {"attachment_tool": "retrieval"},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        RelaySettings(**kwargs)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_get_assistants_client_uses_settings():
    settings = RelaySettings(openai_base_url="http://proxy/v1", request_timeout=12.0)

    with patch("assistant_relay.assistants.client.openai.AsyncOpenAI") as mock_class:
        client = get_assistants_client(settings)

    assert client.base_url == "http://proxy/v1"
    mock_class.assert_called_once_with(
        base_url="http://proxy/v1", timeout=12.0, max_retries=0
    )


def test_version_constant():
    assert __version__ == "0.1.0"
