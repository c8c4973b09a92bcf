"""Integration tests for the health endpoint."""

from datetime import datetime


class TestHealthAPI:
    def test_reports_ok_with_timestamp(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None
