"""Fixtures for security tests that go through the HTTP interface."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from taskvault.main import app


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ann_token(client) -> str:
    response = client.post("/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "secret1"})
    return response.json()["token"]
