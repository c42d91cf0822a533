"""
Shared fixtures: every test starts from default settings.
"""
import pytest

from core.config import reset_settings

SETTINGS_ENV_VARS = [
    "APP_NAME",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "TIMEZONE",
    "MAX_INPUT_CHARS",
    "TOP_SPENDERS_LIMIT",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
