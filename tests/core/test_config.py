from pathlib import Path

import pytest

from glm_assistant.core.config import DEFAULT_PREFERENCES_PATH, Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("GLM_ASSISTANT_PREFERENCES", "GLM_ASSISTANT_TIMEOUT", "GLM_ASSISTANT_LOG_LEVEL", "APP_DEBUG"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()

    assert s.preferences_path == DEFAULT_PREFERENCES_PATH
    assert s.request_timeout == 60
    assert s.effective_log_level == "WARNING"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("GLM_ASSISTANT_PREFERENCES", str(tmp_path / "p.json"))
    monkeypatch.setenv("GLM_ASSISTANT_TIMEOUT", "12.5")
    monkeypatch.setenv("GLM_ASSISTANT_LOG_LEVEL", "info")
    monkeypatch.setenv("APP_DEBUG", "false")

    s = Settings()

    assert s.preferences_path == Path(tmp_path / "p.json")
    assert s.request_timeout == 12.5
    assert s.effective_log_level == "INFO"


def test_debug_flag_forces_debug_level(monkeypatch):
    monkeypatch.setenv("APP_DEBUG", "yes")

    assert Settings().effective_log_level == "DEBUG"


def test_get_settings_rejects_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("GLM_ASSISTANT_TIMEOUT", "0")
    get_settings.cache_clear()
    try:
        with pytest.raises(RuntimeError):
            get_settings()
    finally:
        get_settings.cache_clear()
