import pytest

from config.iching import DEFAULT_GEMINI_MODEL, DEFAULT_GEMINI_TEMPERATURE


@pytest.fixture(autouse=True)
def isolated_oracle_settings(monkeypatch):
    """Pin oracle settings already read from the environment at import time."""
    monkeypatch.setattr("config.config_api.GEMINI_API_KEY", None)
    monkeypatch.setattr("modules.iching.core.gateway.GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
    monkeypatch.setattr("modules.iching.core.gateway.GEMINI_TEMPERATURE", DEFAULT_GEMINI_TEMPERATURE)
