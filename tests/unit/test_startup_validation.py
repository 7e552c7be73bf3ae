"""Tests for startup validation."""

import pytest

from taskvault.main import validate_startup_configuration


@pytest.mark.unit
def test_startup_fails_without_secret_key(test_settings, monkeypatch, capsys) -> None:
    """Application refuses to start when no signing secret is configured."""
    monkeypatch.setattr(test_settings, "secret_key", None)

    with pytest.raises(SystemExit) as exc_info:
        validate_startup_configuration()

    assert exc_info.value.code == 1
    assert "SECRET_KEY" in capsys.readouterr().err


@pytest.mark.unit
def test_startup_fails_with_empty_secret_key(test_settings, monkeypatch) -> None:
    monkeypatch.setattr(test_settings, "secret_key", "")

    with pytest.raises(SystemExit):
        validate_startup_configuration()


@pytest.mark.unit
def test_startup_succeeds_with_secret_key(test_settings) -> None:
    validate_startup_configuration()
