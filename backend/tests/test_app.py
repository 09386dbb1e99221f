"""Smoke tests for the FastAPI application."""

import logging

import firebase_admin
from conftest import bearer

from plateshare.main import lifespan


class TestHealthCheck:
    """Tests for the health check endpoint."""

    async def test_health_returns_200(self, client):
        response = await client.get("/health")
        assert response.status_code == 200

    async def test_health_returns_healthy_status(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}

    async def test_root_banner(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert "PlateShare API running" in response.text


class TestAppRouting:
    """Tests that app routes are correctly mounted."""

    async def test_protected_route_without_token_returns_401(self, client):
        response = await client.get("/users/charities")
        assert response.status_code == 401
        assert "message" in response.json()

    async def test_invalid_token_returns_401(self, client):
        response = await client.get(
            "/users/charities", headers={"Authorization": "Bearer not-a-real-token"}
        )
        assert response.status_code == 401

    async def test_verified_token_passes(self, client):
        response = await client.get("/users/charities", headers=bearer("anyone@example.com"))
        assert response.status_code == 200
        assert response.json() == []

    async def test_unknown_route_returns_404(self, client):
        response = await client.get("/nonexistent")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    async def test_validation_error_returns_400(self, client):
        response = await client.post("/users", json={"email": "nobody@example.com"})
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "All required fields must be provided"
        assert body["errors"]


class TestLifespan:
    """Startup initializes Firebase Admin once."""

    async def test_initializes_firebase_when_absent(self, app, monkeypatch):
        calls = []
        monkeypatch.setattr(firebase_admin, "_apps", {})
        monkeypatch.setattr(
            firebase_admin, "initialize_app", lambda options=None: calls.append(options)
        )

        try:
            async with lifespan(app):
                pass
        finally:
            logging.basicConfig(level=logging.INFO, force=True)

        assert len(calls) == 1

    async def test_skips_initialized_firebase(self, app, monkeypatch):
        calls = []
        monkeypatch.setattr(firebase_admin, "_apps", {"[DEFAULT]": object()})
        monkeypatch.setattr(
            firebase_admin, "initialize_app", lambda options=None: calls.append(options)
        )

        try:
            async with lifespan(app):
                pass
        finally:
            logging.basicConfig(level=logging.INFO, force=True)

        assert calls == []
