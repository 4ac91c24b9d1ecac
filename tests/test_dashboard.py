"""
Tests for GET /api/dashboard/stats.

These tests verify:
  - Every counter on an empty database is zero
  - User, appointment and withdrawal counters
  - Revenue sums active subscriptions, converting USD at USD_TO_MWK_RATE
  - The subscription distribution groups active subscriptions by plan
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from admin_dashboard.config import settings


class TestDashboardStats:

    async def test_empty_database(self, auth_client):
        response = await auth_client.get("/api/dashboard/stats")
        assert response.status_code == 200
        data = response.json()
        assert all(value == 0 for value in data["stats"].values())
        assert data["subscriptionData"] == []

    async def test_counters(
        self, auth_client, doctor, patient, make_user, make_appointment, make_withdrawal,
    ):
        await make_user(user_type="admin")
        await make_appointment(doctor, patient, status="pending")
        await make_appointment(doctor, patient, status="completed")
        await make_appointment(doctor, patient, status="cancelled")
        await make_withdrawal(doctor)
        await make_withdrawal(doctor, status="paid")

        stats = (await auth_client.get("/api/dashboard/stats")).json()["stats"]
        assert stats["totalUsers"] == 3
        assert stats["totalDoctors"] == 1
        assert stats["totalPatients"] == 1
        assert stats["totalAppointments"] == 3
        assert stats["pendingAppointments"] == 1
        assert stats["completedAppointments"] == 1
        assert stats["todayAppointments"] == 3
        assert stats["pendingWithdrawals"] == 1

    async def test_revenue_converts_usd(
        self, auth_client, db_session, patient, make_subscription, monkeypatch,
    ):
        monkeypatch.setattr(settings, "USD_TO_MWK_RATE", 1800)
        await make_subscription(patient, plan_price=Decimal("10000.00"), plan_currency="MWK")
        await make_subscription(patient, plan_price=Decimal("10.00"), plan_currency="USD")
        # Inactive subscriptions don't count
        await make_subscription(
            patient, plan_price=Decimal("99999.00"), status="cancelled", is_active=False,
        )
        last_year = await make_subscription(patient, plan_price=Decimal("5000.00"))
        last_year.created_at = datetime.now(timezone.utc) - timedelta(days=400)
        await db_session.commit()

        stats = (await auth_client.get("/api/dashboard/stats")).json()["stats"]
        assert stats["activeSubscriptions"] == 3
        assert stats["totalRevenue"] == 10000 + 10 * 1800 + 5000
        assert stats["monthlyRevenue"] == 10000 + 10 * 1800
        assert stats["todayRevenue"] == 10000 + 10 * 1800

    async def test_subscription_distribution(self, auth_client, patient, make_subscription):
        await make_subscription(patient, plan_name="Basic")
        await make_subscription(patient, plan_name="Premium")
        await make_subscription(patient, plan_name="Premium")
        await make_subscription(patient, plan_name="Executive", status="expired", is_active=False)

        data = (await auth_client.get("/api/dashboard/stats")).json()
        assert data["subscriptionData"] == [
            {"name": "Premium", "value": 2},
            {"name": "Basic", "value": 1},
        ]
