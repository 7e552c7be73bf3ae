"""Pytest configuration and fixtures for unit tests."""

import pytest

from taskvault.core import db_client
from taskvault.domain.user import PublicUser
from taskvault.services import user_service


@pytest.fixture
async def db(test_settings):
    """Initialized schema on a fresh database file, closed after the test."""
    await db_client.init_db()
    yield db_client
    await db_client.close_connection()


@pytest.fixture
async def ann(db) -> PublicUser:
    return await user_service.register(name="Ann", email="ann@x.com", password="secret1")


@pytest.fixture
async def bob(db) -> PublicUser:
    return await user_service.register(name="Bob", email="bob@x.com", password="hunter22")
