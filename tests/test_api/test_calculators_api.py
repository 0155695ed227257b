"""Tests for the calculator routes."""

from __future__ import annotations


class TestCalculatorRoutes:
    def test_list(self, client):
        response = client.get("/api/calculators")
        assert response.status_code == 200
        assert len(response.json()) == 15

    def test_list_by_category(self, client):
        response = client.get("/api/calculators", params={"category": "Education"})
        assert [c["id"] for c in response.json()] == ["gi_bill_estimator"]

    def test_categories(self, client):
        response = client.get("/api/calculators/categories")
        assert len(response.json()) == 7

    def test_get_one(self, client):
        response = client.get("/api/calculators/sbp_calculator")
        assert response.status_code == 200

        data = response.json()
        assert data["title"] == "Survivor Benefit Plan (SBP) Calculator"
        assert data["category"] == "Protection"
        assert [i["name"] for i in data["inputs"]][0] == "gross_retired_pay"

    def test_get_unknown(self, client):
        response = client.get("/api/calculators/nope")
        assert response.status_code == 404

    def test_lookup_by_route(self, client):
        response = client.get(
            "/api/calculators/lookup", params={"route": "/veterans/calculators/gi-bill"}
        )
        assert response.status_code == 200
        assert response.json()["id"] == "gi_bill_estimator"

    def test_lookup_unknown_route(self, client):
        response = client.get("/api/calculators/lookup", params={"route": "/nowhere"})
        assert response.status_code == 404


class TestRunRoute:
    """Tests for POST /api/calculators/{id}/run."""

    def test_run(self, client):
        response = client.post(
            "/api/calculators/va_combined_rating/run",
            json={"ratings": [50, 30]},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["calculator_id"] == "va_combined_rating"
        assert data["result"]["rounded_combined_rating"] == 70

    def test_run_serialises_dates(self, client):
        response = client.post(
            "/api/calculators/mra_calculator/run",
            json={"date_of_birth": "1960-05-15", "years_of_service": 20},
        )
        assert response.json()["result"]["earliest_immediate_retirement_date"] == "2016-05-15"

    def test_run_invalid_input(self, client):
        response = client.post(
            "/api/calculators/va_combined_rating/run",
            json={"ratings": [150]},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid input"

    def test_run_missing_field(self, client):
        response = client.post("/api/calculators/sbp_calculator/run", json={})
        assert response.status_code == 422

    def test_run_unknown(self, client):
        response = client.post("/api/calculators/nope/run", json={})
        assert response.status_code == 404

    def test_run_long_high_return_projection(self, client):
        response = client.post(
            "/api/calculators/tsp_growth_calculator/run",
            json={
                "monthly_contribution": 500,
                "annual_return_rate": 100,
                "years_until_retirement": 80,
            },
        )
        assert response.status_code == 200
        assert response.json()["result"]["projected_balance_at_retirement"] > 1e30

    def test_run_rejects_out_of_range_return(self, client):
        response = client.post(
            "/api/calculators/tsp_growth_calculator/run",
            json={
                "monthly_contribution": 500,
                "annual_return_rate": 1000,
                "years_until_retirement": 80,
            },
        )
        assert response.status_code == 422
