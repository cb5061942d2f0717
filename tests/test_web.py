#!/usr/bin/env python3
"""Tests for the Flask JSON endpoints."""

import pytest

from web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestEstimateEndpoint:
    """Tests for GET /api/estimate."""

    def test_estimate(self, client):
        response = client.get(
            "/api/estimate",
            query_string={
                "make": "Tesla",
                "model": "Model 3",
                "year": "2025",
                "asOf": "2025-06-01",
                "seed": "1",
            },
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["vehicle"] == "2025 Tesla Model 3"
        assert data["currentValue"] == 45000
        assert data["priceSource"] == "table"
        assert data["trend"] == "stable"
        assert data["asOf"] == "2025-06-01"
        assert [p["monthOffset"] for p in data["projection"]] == [0, 1, 2, 3]

    def test_seed_makes_response_reproducible(self, client):
        params = {"make": "Toyota", "model": "Camry", "year": "2023", "seed": "9"}
        first = client.get("/api/estimate", query_string=params).get_json()
        second = client.get("/api/estimate", query_string=params).get_json()
        assert first == second

    def test_purchase_price_and_mileage(self, client):
        response = client.get(
            "/api/estimate",
            query_string={
                "make": "Unknown",
                "model": "X",
                "year": "1975",
                "purchasePrice": "10000",
                "mileage": "150000",
                "asOf": "2025-06-01",
            },
        )
        data = response.get_json()
        assert data["currentValue"] == 3000
        assert data["priceSource"] == "purchase_price"
        assert data["factors"]["mileageImpact"] == pytest.approx(4.5)

    def test_missing_make(self, client):
        response = client.get("/api/estimate?model=X&year=2020")
        assert response.status_code == 400
        assert "make" in response.get_json()["error"]

    def test_missing_year(self, client):
        response = client.get("/api/estimate?make=Tesla&model=X")
        assert response.status_code == 400
        assert "year" in response.get_json()["error"]

    def test_invalid_year(self, client):
        response = client.get("/api/estimate?make=Tesla&model=X&year=new")
        assert response.status_code == 400
        assert "Invalid value for 'year'" in response.get_json()["error"]

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_purchase_price(self, client, value):
        response = client.get(
            "/api/estimate",
            query_string={
                "make": "Unknown",
                "model": "X",
                "year": "2020",
                "purchasePrice": value,
            },
        )
        assert response.status_code == 400
        assert "purchasePrice" in response.get_json()["error"]

    def test_invalid_as_of(self, client):
        response = client.get("/api/estimate?make=Tesla&model=X&year=2020&asOf=soon")
        assert response.status_code == 400
        assert "asOf" in response.get_json()["error"]


class TestReferenceEndpoints:
    """Tests for reference and health endpoints."""

    def test_prices(self, client):
        data = client.get("/api/reference/prices?make=Tesla").get_json()
        assert data["defaultPrice"] == 35000
        assert {"make": "Tesla", "model": "Model 3", "price": 45000} in data["prices"]
        assert all(row["make"] == "Tesla" for row in data["prices"])

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
