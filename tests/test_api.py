"""
Tests for the forecast API.

Run with: python3 -m pytest tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from inventory_forecast.common import SalesDataLoader


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def template_bytes(tmp_path):
    return SalesDataLoader.write_template(tmp_path / "sales-template.csv").read_bytes()


class TestHealth:
    """Health check."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.0.0"}


class TestUploadForecast:
    """POST /forecast with a sales sheet."""

    def test_default_horizon(self, client, template_bytes):
        response = client.post("/forecast", files={"file": ("sales.csv", template_bytes, "text/csv")})

        assert response.status_code == 200
        data = response.json()
        assert len(data["forecast"]) == 8
        assert data["metadata"] == {"periods": 8, "method": "Enhanced Multi-Method"}
        assert 70.0 <= data["accuracy"] <= 95.0
        assert "confidence_level" in data["insights"]

    def test_horizon_and_product(self, client, template_bytes):
        response = client.post(
            "/forecast",
            params={"horizon": 12, "product_id": "PROD001"},
            files={"file": ("sales.csv", template_bytes, "text/csv")}
        )

        assert response.status_code == 200
        assert len(response.json()["forecast"]) == 12

    def test_unsupported_file(self, client):
        response = client.post("/forecast", files={"file": ("sales.txt", b"hello", "text/plain")})
        assert response.status_code == 400

    def test_no_valid_rows(self, client):
        content = b"date,productId,quantity\nnever,P1,abc\n"
        response = client.post("/forecast", files={"file": ("sales.csv", content, "text/csv")})
        assert response.status_code == 400

    def test_too_few_dates(self, client):
        content = b"date,productId,quantity\n2024-01-01,P1,3\n2024-01-08,P1,4\n"
        response = client.post("/forecast", files={"file": ("sales.csv", content, "text/csv")})
        assert response.status_code == 422
        assert "at least 3" in response.json()["detail"]

    def test_invalid_horizon(self, client, template_bytes):
        response = client.post(
            "/forecast",
            params={"horizon": 0},
            files={"file": ("sales.csv", template_bytes, "text/csv")}
        )
        assert response.status_code == 422


class TestObservationsForecast:
    """POST /forecast/observations with a JSON body."""

    def test_observations(self, client, sample_rows):
        response = client.post("/forecast/observations", json={"observations": sample_rows, "horizon": 4})

        assert response.status_code == 200
        data = response.json()
        assert [point["date"] for point in data["forecast"]] == [
            "2024-03-11", "2024-03-18", "2024-03-25", "2024-04-01"
        ]

    def test_mixed_date_types(self, client):
        observations = [
            {"date": 45000, "quantity": 10},
            {"date": "2023-03-22", "quantity": 12},
            {"date": "March 29th, 2023", "quantity": 11},
            {"date": "junk", "quantity": 99},
        ]
        response = client.post("/forecast/observations", json={"observations": observations})

        assert response.status_code == 200
        assert response.json()["forecast"][0]["date"] == "2023-04-05"

    def test_product_filter(self, client, sample_rows):
        observations = [dict(row, product_id="A") for row in sample_rows]
        observations.append({"date": "2024-01-01", "quantity": 500, "product_id": "B"})

        filtered = client.post(
            "/forecast/observations",
            json={"observations": observations, "horizon": 4, "product_id": "A"}
        )
        unfiltered = client.post("/forecast/observations", json={"observations": sample_rows, "horizon": 4})

        assert filtered.json()["forecast"] == unfiltered.json()["forecast"]

    def test_insufficient_data(self, client):
        response = client.post("/forecast/observations", json={"observations": [], "horizon": 4})
        assert response.status_code == 422
