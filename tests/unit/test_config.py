"""Configuration tests."""

import pytest
from pydantic import ValidationError

from mdxstream.core import Settings, get_settings


@pytest.mark.unit
def test_settings_from_test_environment():
    """Test environment overrides from pytest_configure are applied."""
    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.metrics_enabled is False
    assert settings.stream_batch_size == 20
    assert settings.max_nesting_depth == 64
    assert settings.json_logs is False


@pytest.mark.unit
def test_settings_cached():
    """Test settings are loaded once."""
    assert get_settings() is get_settings()


@pytest.mark.unit
def test_settings_env_prefix(monkeypatch):
    """Test fields are read from MDX_-prefixed variables."""
    monkeypatch.setenv("MDX_STREAM_BATCH_SIZE", "5")
    monkeypatch.setenv("MDX_JSON_LOGS", "true")

    settings = Settings()

    assert settings.stream_batch_size == 5
    assert settings.json_logs is True


@pytest.mark.unit
def test_settings_validation():
    """Test settings validation."""
    # Valid settings
    settings = Settings(max_nesting_depth=8)
    assert settings.max_nesting_depth == 8

    # Frames need at least one character
    with pytest.raises(ValidationError):
        Settings(stream_batch_size=0)

    # Nesting limit bounds
    with pytest.raises(ValidationError):
        Settings(max_nesting_depth=0)
    with pytest.raises(ValidationError):
        Settings(max_nesting_depth=129)
