"""Tests for the health check endpoint and basic app setup."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from seeksy.config import settings


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_response_body(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert "env" in data


class TestApiKey:
    """Tests for the X-API-Key dependency."""

    def test_development_allows_missing_key(self, client):
        with patch.object(settings, "seeksy_env", "development"):
            response = client.get("/api/calculators/categories")
        assert response.status_code == 200

    def test_production_rejects_missing_key(self, client):
        with patch.object(settings, "seeksy_env", "production"):
            response = client.get("/api/calculators/categories")
        assert response.status_code == 403

    def test_production_accepts_valid_key(self, client):
        with patch.object(settings, "seeksy_env", "production"):
            response = client.get(
                "/api/calculators/categories",
                headers={"X-API-Key": settings.seeksy_api_key},
            )
        assert response.status_code == 200


class TestErrorHandlers:
    """Uniform ``{"error": ...}`` responses."""

    def test_value_error_is_400(self, client):
        with patch(
            "seeksy.api.routes.finance.calculate_roi",
            side_effect=ValueError("cac must be positive"),
        ):
            response = client.post(
                "/api/finance/roi",
                json={"marketing_spend": 1, "cac": 1, "monthly_churn_pct": 1, "arpu": 1},
            )
        assert response.status_code == 400
        assert response.json() == {"error": "cac must be positive"}

    def test_unhandled_error_is_500(self):
        with (
            patch("seeksy.db.session.init_db", new_callable=AsyncMock),
            patch("seeksy.db.session.close_db", new_callable=AsyncMock),
            patch(
                "seeksy.api.routes.finance.calculate_roi",
                side_effect=RuntimeError("boom"),
            ),
        ):
            from seeksy.main import app

            with TestClient(app, raise_server_exceptions=False) as c:
                response = c.post(
                    "/api/finance/roi",
                    json={"marketing_spend": 1, "cac": 1, "monthly_churn_pct": 1, "arpu": 1},
                )
        assert response.status_code == 500
        assert response.json() == {"error": "boom"}

    @pytest.mark.asyncio
    async def test_lifespan_initialises_and_closes_db(self):
        from seeksy.main import app, lifespan

        with (
            patch("seeksy.db.session.init_db", new_callable=AsyncMock) as init_db,
            patch("seeksy.db.session.close_db", new_callable=AsyncMock) as close_db,
        ):
            async with lifespan(app):
                init_db.assert_awaited_once()
                close_db.assert_not_awaited()
            close_db.assert_awaited_once()
