"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from taskboard.core.config import AuthConfig, ServerConfig, Settings, get_settings, reload_settings


def test_config_defaults(monkeypatch):
    """Test default configuration values."""
    for name in ("AUTH_SECRET_KEY", "AUTH_TOKEN_TTL_HOURS", "DATABASE_URL", "SERVER_PORT", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)

    assert config.auth.secret_key is None
    assert config.auth.algorithm == "HS256"
    assert config.auth.token_ttl_hours == 24
    assert config.auth.min_password_length == 8
    assert config.database.database_url == "sqlite:///data/taskboard.db"
    assert config.server.port == 5000
    assert config.debug is False
    assert config.log_level == "INFO"


def test_config_from_environment(monkeypatch):
    """Sub-configurations read their own prefixed variables."""
    monkeypatch.setenv("AUTH_SECRET_KEY", "from-env")
    monkeypatch.setenv("AUTH_TOKEN_TTL_HOURS", "2")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/other.db")
    monkeypatch.setenv("SERVER_PORT", "9000")

    config = Settings(_env_file=None)

    assert config.auth.secret_key.get_secret_value() == "from-env"
    assert config.auth.token_ttl_hours == 2
    assert config.database.database_url == "sqlite:///tmp/other.db"
    assert config.server.port == 9000


def test_secret_key_is_masked():
    config = AuthConfig(secret_key="hunter2-hunter2")

    assert "hunter2" not in repr(config)
    assert config.secret_key.get_secret_value() == "hunter2-hunter2"


def test_config_validation_invalid_port():
    with pytest.raises(ValidationError):
        ServerConfig(port=70000)


def test_config_validation_invalid_ttl():
    with pytest.raises(ValidationError):
        AuthConfig(token_ttl_hours=0)


def test_reload_settings(monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "6001")
    first = reload_settings()
    assert get_settings() is first
    assert first.server.port == 6001

    monkeypatch.setenv("SERVER_PORT", "6002")
    assert reload_settings().server.port == 6002
