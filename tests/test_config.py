"""
Unit tests for configuration module.
"""
import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings, reset_settings


def test_settings_defaults():
    """Test default configuration values."""
    settings = get_settings()
    assert settings.app_name == "Earnings Paste Analyzer"
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.timezone == "UTC"
    assert settings.top_spenders_limit == 3
    assert settings.max_input_chars == 2_000_000


def test_settings_validation_port(monkeypatch):
    """Test port validation."""
    monkeypatch.setenv("PORT", "99999")

    with pytest.raises(ValidationError):
        get_settings()


def test_settings_validation_log_level(monkeypatch):
    """Test log level validation."""
    monkeypatch.setenv("LOG_LEVEL", "INVALID")

    with pytest.raises(ValidationError):
        get_settings()


def test_settings_log_level_is_uppercased(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert get_settings().log_level == "DEBUG"


def test_settings_validation_timezone(monkeypatch):
    """Test unknown timezones are rejected."""
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValidationError):
        get_settings()


def test_settings_timezone_zone(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "America/New_York")

    settings = get_settings()
    assert settings.zone.key == "America/New_York"


def test_settings_validation_top_spenders_limit(monkeypatch):
    monkeypatch.setenv("TOP_SPENDERS_LIMIT", "0")

    with pytest.raises(ValidationError):
        get_settings()


def test_settings_singleton():
    """Test settings singleton behavior."""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2


def test_reset_settings_creates_new_instance():
    settings1 = get_settings()
    reset_settings()
    assert get_settings() is not settings1
    assert isinstance(settings1, Settings)
