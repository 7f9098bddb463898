"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from provisioner.infrastructure.database import get_session
from provisioner.main import app


@pytest.fixture
def session() -> AsyncMock:
    """Database session double."""
    return AsyncMock()


@pytest.fixture
def client(session: AsyncMock):
    """Create test client with the database session overridden."""
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "product-provisioner"
    assert "version" in data


def test_readiness_check(client: TestClient, session: AsyncMock) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"
    session.execute.assert_awaited_once()


def test_readiness_check_database_down(client: TestClient, session: AsyncMock) -> None:
    """Test readiness endpoint reports an unreachable database."""
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("unable to open database file"))

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "error": "OperationalError"}
