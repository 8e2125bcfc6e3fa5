"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Test /health and /healthz endpoints."""

    def test_liveness_always_ok(self, api_client: TestClient) -> None:
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_healthz_with_real_sqlite(self, api_client: TestClient) -> None:
        """Test /healthz against the test database with Redis not configured."""
        response = api_client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"] == {
            "db": "ok",
            "redis": "not_configured",
            "llm": "DeterministicStubClient",
        }
        assert data["caches"]["itinerary_templates"] >= 12
        assert data["background_jobs"] == 0

    @patch("backend.app.api.routes.health.check_redis", new_callable=AsyncMock)
    @patch("backend.app.api.routes.health.check_db", new_callable=AsyncMock)
    def test_healthz_returns_503_when_db_fails(
        self,
        mock_check_db: AsyncMock,
        mock_check_redis: AsyncMock,
        api_client: TestClient,
    ) -> None:
        """Test /healthz returns 503 when DB check fails."""
        mock_check_db.return_value = (False, "error: OperationalError")
        mock_check_redis.return_value = (True, "ok")

        response = api_client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "error: OperationalError"
        assert data["components"]["redis"] == "ok"

    @patch("backend.app.api.routes.health.check_redis", new_callable=AsyncMock)
    @patch("backend.app.api.routes.health.check_db", new_callable=AsyncMock)
    def test_healthz_returns_503_when_redis_fails(
        self,
        mock_check_db: AsyncMock,
        mock_check_redis: AsyncMock,
        api_client: TestClient,
    ) -> None:
        """Test /healthz returns 503 when Redis check fails."""
        mock_check_db.return_value = (True, "ok")
        mock_check_redis.return_value = (False, "error: ConnectionError")

        response = api_client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["components"]["redis"] == "error: ConnectionError"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_pipeline_counters(self, api_client: TestClient) -> None:
        """Test /metrics returns Prometheus text including the trip pipeline metrics."""
        api_client.get("/api/visa", params={"passport": "United States", "destination": "Paris"})

        response = api_client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        body = response.text
        assert "trip_pipeline_runs_total" in body
        assert "itinerary_lock_acquisitions_total" in body
        assert "cache_events_total" in body

    def test_root(self, api_client: TestClient) -> None:
        response = api_client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Travel Planner API"
