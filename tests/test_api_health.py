"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, MagicMock

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from scorecard.api.health import reference_status
from scorecard.db.database import get_reference_database, get_session
from scorecard.main import app
from scorecard.services.reference_db import ReferenceDatabase


def test_app_imports() -> None:
    """The app imports and carries its configured title."""
    assert app.title == "Scorecard"


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data.get("database") is None


class TestReadyEndpoint:
    async def test_ready_returns_ready(self, client: AsyncClient) -> None:
        """Readiness probe returns ready when the card store is connected."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
        assert data["reference"] == "disabled"

    async def test_ready_returns_503_on_db_failure(self) -> None:
        """Readiness probe returns 503 when the card store is unavailable."""

        async def override_get_session_broken():
            mock_session = AsyncMock()
            mock_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
            yield mock_session

        app.dependency_overrides[get_session] = override_get_session_broken
        app.dependency_overrides[get_reference_database] = lambda: None

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        app.dependency_overrides.clear()

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["database"] == "disconnected"


class TestReferenceStatus:
    async def test_disabled(self) -> None:
        """No reference store reads as disabled."""
        assert await reference_status(None) == "disabled"

    async def test_connected(self, session_factory) -> None:
        """A reachable reference store reads as connected."""
        assert await reference_status(ReferenceDatabase(session_factory)) == "connected"

    async def test_disconnected(self) -> None:
        """A failing reference store reads as disconnected without raising."""
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        factory = MagicMock()
        factory.return_value.__aenter__.return_value = session

        assert await reference_status(ReferenceDatabase(factory)) == "disconnected"
