"""Fixtures for tests that drive the application over HTTP."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from taskvault.main import app


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """Client bound to a fresh database; entering it runs the lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    """Register an account and return the response body."""

    def _register(name: str = "Ann", email: str = "ann@x.com", password: str = "secret1") -> dict:
        response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ann_headers(register) -> dict[str, str]:
    return _bearer(register()["token"])


@pytest.fixture
def bob_headers(register) -> dict[str, str]:
    return _bearer(register("Bob", "bob@x.com", "hunter22")["token"])
