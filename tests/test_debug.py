"""
Tests for GET /api/debug/database.

The endpoint exists only while DEBUG is on; otherwise it answers 404.
"""

from admin_dashboard.config import settings
from admin_dashboard.services import diagnostics_service


class TestDebugDatabase:

    async def test_disabled_by_default(self, auth_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", False)
        response = await auth_client.get("/api/debug/database")
        assert response.status_code == 404

    async def test_row_counts(self, auth_client, doctor, patient, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", True)

        response = await auth_client.get("/api/debug/database")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Database connection OK"
        assert data["tables"]["users"] == 2
        assert data["tables"]["withdrawal_requests"] == 0

    async def test_failure_reports_error(self, auth_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", True)

        async def broken(db):
            raise RuntimeError("connection refused")

        monkeypatch.setattr(diagnostics_service, "table_row_counts", broken)

        response = await auth_client.get("/api/debug/database")
        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Database check failed"
        assert data["error"] == "connection refused"
        assert "RuntimeError" in data["stack"]
