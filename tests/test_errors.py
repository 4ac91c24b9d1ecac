"""
Tests for the catch-all error handler.

An exception no handler knows about is logged with its traceback and
answered with a bare 500; nothing about the failure reaches the client.
"""

import logging

from httpx import AsyncClient, ASGITransport

from admin_dashboard.main import app
from admin_dashboard.services import dashboard_service


class TestUnhandledErrors:

    async def test_internal_error_hides_details(self, auth_client, monkeypatch, caplog):
        async def broken_stats(db):
            raise RuntimeError("connection pool exhausted at db-internal:5432")

        monkeypatch.setattr(dashboard_service, "get_dashboard_stats", broken_stats)

        # The server error middleware re-raises after responding unless told not to
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
            headers=auth_client.headers,
        ) as ac:
            with caplog.at_level(logging.ERROR, logger="admin_dashboard.exceptions"):
                response = await ac.get("/api/dashboard/stats")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "db-internal" not in response.text

        assert "Unhandled error on GET /api/dashboard/stats" in caplog.text
        assert "connection pool exhausted" in caplog.text
