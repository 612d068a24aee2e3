"""Tests for the health check endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


@pytest.fixture
def app():
    """
    Create a minimal FastAPI app with only the health endpoint.

    Returns:
        FastAPI: FastAPI application instance.
    """
    from author_manager.api.http.health import router

    test_app = FastAPI()
    test_app.include_router(router)
    return test_app


@pytest.fixture
def client(app):
    """
    Create a test client for the FastAPI application.

    Args:
        app: FastAPI application fixture.

    Returns:
        TestClient: FastAPI test client instance.
    """
    return TestClient(app)


def test_health_endpoint_database_healthy(client):
    """
    Test health endpoint when the database answers.

    Args:
        client: FastAPI test client fixture.
    """
    # Mock successful database connection
    mock_conn = AsyncMock()
    mock_engine = MagicMock()
    mock_engine.connect.return_value.__aenter__.return_value = mock_conn

    with patch("author_manager.api.http.health.engine", mock_engine):
        response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    mock_conn.execute.assert_called_once()


def test_health_endpoint_database_unhealthy(client):
    """
    Test health endpoint when the database is unreachable.

    Args:
        client: FastAPI test client fixture.
    """
    # Mock failed database connection
    mock_engine = MagicMock()
    mock_engine.connect.side_effect = OperationalError(
        "could not connect to server",
        params=None,
        orig=Exception("Connection refused"),
    )

    with patch("author_manager.api.http.health.engine", mock_engine):
        response = client.get("/health")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "unhealthy"


def test_health_endpoint_connection_timeout(client):
    """
    Test health endpoint when connecting times out.

    Args:
        client: FastAPI test client fixture.
    """
    mock_engine = MagicMock()
    mock_engine.connect.return_value.__aenter__.side_effect = TimeoutError()

    with patch("author_manager.api.http.health.engine", mock_engine):
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "unhealthy"
