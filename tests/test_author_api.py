"""
Tests for the author HTTP endpoints.

A minimal FastAPI app with only the author router runs against a seeded
SQLite database through a dependency override.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from author_manager.api.http.author import router
from author_manager.exceptions import DatabaseError
from author_manager.storage.db import get_session


@pytest.fixture
def client(sync_seeded_factory):
    """
    Create a test client whose sessions use the seeded database.

    Yields:
        TestClient: FastAPI test client instance.
    """

    async def override_session():
        async with sync_seeded_factory() as session:
            yield session

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_session] = override_session

    with TestClient(app) as test_client:
        yield test_client


class TestReadAuthors:
    """Tests for author listing endpoints."""

    def test_get_authors(self, client):
        """Test the listing holds every author without passwords."""
        response = client.get("/authors")

        assert response.status_code == 200
        data = response.json()
        assert [a["id"] for a in data] == [1, 2]
        assert data[1]["config"] == {"theme": "dark"}
        assert all("password" not in a for a in data)

    def test_get_author(self, client):
        """Test fetching a single author."""
        response = client.get("/authors/2")

        assert response.status_code == 200
        assert response.json()["username"] == "bob"

    def test_get_missing_author(self, client):
        """Test an unknown id answers 404."""
        response = client.get("/authors/99")

        assert response.status_code == 404
        assert response.json()["detail"] == "Author with ID 99 not found"


class TestSaveAuthor:
    """Tests for create and update endpoints."""

    def test_create_author(self, client):
        """Test creating an author returns the refreshed listings."""
        response = client.post(
            "/authors",
            json={"name": "Jane Doe", "additionalData": {"bio": "hi"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] is True
        assert data["message"] == "author-added"
        assert data["postsAuthors"] == {"1": [3], "2": [1, 2]}
        created = data["authors"][-1]
        assert created["username"] == "jane-doe"
        assert created["additionalData"] == {"bio": "hi"}

    def test_string_config_accepted(self, client):
        """Test a JSON-encoded config string is stored and returned as sent."""
        config = '{"avatar": "media/jane.png"}'

        response = client.post(
            "/authors", json={"name": "Jane Doe", "config": config}
        )

        assert response.status_code == 200
        assert response.json()["authors"][-1]["config"] == config
        assert client.get("/authors/3").json()["config"] == config

    def test_empty_name_rejected(self, client):
        """Test a blank name answers 400 with the message code."""
        response = client.post("/authors", json={"name": "   "})

        assert response.status_code == 400
        assert response.json() == {
            "status": False,
            "message": "author-empty-name",
        }

    def test_duplicate_name_rejected(self, client):
        """Test a taken name answers 400."""
        response = client.post("/authors", json={"name": "Bob"})

        assert response.status_code == 400
        assert response.json()["message"] == "author-duplicate-name"

    def test_update_uses_path_id(self, client):
        """Test PUT updates the author named in the path."""
        response = client.put(
            "/authors/2", json={"id": 0, "name": "Robert", "username": "rob"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "author-updated"
        author = client.get("/authors/2").json()
        assert author["name"] == "Robert"
        assert author["username"] == "rob"
        assert [a["id"] for a in client.get("/authors").json()] == [1, 2]

    def test_invalid_body_rejected(self, client):
        """Test a negative id fails request validation."""
        response = client.post("/authors", json={"id": -5, "name": "X"})

        assert response.status_code == 422

    def test_storage_failure(self, client):
        """Test storage errors answer with the exception status."""
        with patch(
            "author_manager.services.author_lifecycle.AuthorLifecycle.save",
            AsyncMock(side_effect=DatabaseError("Author storage is unavailable")),
        ):
            response = client.post("/authors", json={"name": "Jane Doe"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Author storage is unavailable"


class TestDeleteAuthor:
    """Tests for the delete endpoint."""

    def test_delete_main_author_rejected(self, client):
        """Test the main author cannot be deleted."""
        response = client.delete("/authors/1")

        assert response.status_code == 400
        assert response.json()["message"] == "cannot-delete-main-author"

    def test_delete_author(self, client):
        """Test deleting reassigns posts in the returned listings."""
        response = client.delete("/authors/2")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "author-deleted"
        assert [p["authors"] for p in data["posts"]] == ["1", "1", "1"]
        assert data["postsAuthors"] == {"1": [1, 2, 3]}
        assert client.get("/authors/2").status_code == 404
