"""
Test suite for health and middleware behaviour.

System role: Verification of application assembly
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from assistant.api.main import create_app


class TestHealth:
    """Test suite for GET /api/health."""

    def test_health_should_return_healthy(self) -> None:
        """Test the health endpoint with the D2 CLI installed."""
        with patch("assistant.api.routers.health.shutil.which", return_value="/usr/bin/d2"):
            response = TestClient(create_app()).get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy", "d2_available": True}

    def test_health_should_report_missing_d2(self) -> None:
        """Test a missing D2 CLI is reported but still healthy."""
        with patch("assistant.api.routers.health.shutil.which", return_value=None):
            response = TestClient(create_app()).get("/api/health")

        assert response.status_code == 200
        assert response.json()["d2_available"] is False

    def test_correlation_id_should_be_echoed(self) -> None:
        """Test a supplied correlation ID comes back in the response."""
        response = TestClient(create_app()).get("/api/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["x-correlation-id"] == "abc-123"

    def test_correlation_id_should_be_generated(self) -> None:
        """Test a correlation ID is generated when absent."""
        response = TestClient(create_app()).get("/api/health")

        assert response.headers["x-correlation-id"]
