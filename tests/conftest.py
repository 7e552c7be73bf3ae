"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator

import pytest

from taskvault.core.config import Settings, settings


TEST_SECRET_KEY = "test-secret-key-for-session-signing"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[Settings]:
    """Point every test at its own SQLite file and a known signing secret."""
    monkeypatch.setattr(settings, "secret_key", TEST_SECRET_KEY)
    monkeypatch.setattr(settings, "sqlite_db_path", str(tmp_path / "taskvault.db"))
    monkeypatch.setattr(settings, "session_max_age_seconds", 3600)
    monkeypatch.setattr(settings, "db_operation_timeout_seconds", 10.0)
    yield settings
