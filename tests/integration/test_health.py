"""Integration tests for health endpoints."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from backend.travelgpt.config import Settings, get_settings
from backend.travelgpt.db.engine import get_session
from backend.travelgpt.main import app


@pytest.fixture
def client(sqlite_url: str) -> Iterator[TestClient]:
    """Test client with a temporary database and no LLM key."""
    engine = create_async_engine(sqlite_url, poolclass=NullPool)
    settings = Settings(
        _env_file=None, database_url=sqlite_url, llm_provider="openai", openai_api_key=None
    )

    async def override_session():
        async with AsyncSession(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_settings] = lambda: settings

    yield TestClient(app)

    app.dependency_overrides.clear()


def test_health_always_ok(client: TestClient) -> None:
    """Test /health returns 200."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client: TestClient) -> None:
    """Test the root endpoint names the API."""
    assert client.get("/").json()["message"] == "TravelGPT API"


def test_healthz_reports_components(client: TestClient) -> None:
    """Test /healthz with a reachable database and the stub fallback."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "components": {"db": "ok", "llm": "stub"}}


@patch("backend.travelgpt.api.routes.health.check_db")
def test_healthz_returns_503_when_db_fails(mock_check_db: MagicMock, client: TestClient) -> None:
    """Test /healthz returns 503 when the database check fails."""
    mock_check_db.return_value = (False, "error: OperationalError")

    response = client.get("/healthz")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["components"]["db"] == "error: OperationalError"


def test_metrics_endpoint(client: TestClient) -> None:
    """Test /metrics exposes the agent and export metrics."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    for name in ("agent_turn_latency_ms", "agent_turn_errors_total", "plan_activities",
                 "excel_exports_total"):
        assert name in response.text
