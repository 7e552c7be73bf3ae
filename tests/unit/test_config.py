"""Tests for configuration validation."""

import pytest

from taskvault.core.config import Settings, constants


def test_require_credential_with_valid_value() -> None:
    """Test require_credential returns value when credential is set."""
    settings = Settings(secret_key="s3cret")

    assert settings.require_credential("secret_key", "Session signing") == "s3cret"


def test_require_credential_with_none_raises_error() -> None:
    """Test require_credential raises ValueError when credential is None."""
    settings = Settings(secret_key=None)

    with pytest.raises(ValueError, match="Session signing credential not configured"):
        settings.require_credential("secret_key", "Session signing")


def test_require_credential_with_empty_string_raises_error() -> None:
    """Test require_credential raises ValueError when credential is empty."""
    settings = Settings(secret_key="")

    with pytest.raises(ValueError, match="SECRET_KEY"):
        settings.require_credential("secret_key", "Session signing")


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test settings pick up environment variables case-insensitively."""
    monkeypatch.setenv("SESSION_MAX_AGE_SECONDS", "60")
    monkeypatch.setenv("environment", "Production")

    settings = Settings()

    assert settings.session_max_age_seconds == 60
    assert settings.environment == "Production"


def test_pagination_defaults() -> None:
    assert constants.DEFAULT_PAGE == 1
    assert constants.DEFAULT_PAGE_LIMIT == 10
