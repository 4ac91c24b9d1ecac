"""
Tests for user management endpoints.

These tests verify:
  - Listing with pagination, search, type and status filters
  - The detail view (subscription, activity counters, recent history)
  - Status updates: valid values, rejected values, missing users
  - Approval/rejection emails for doctors, and that email failure
    doesn't fail the status change
  - Deletion and the pending-doctor queue
"""

from decimal import Decimal

import pytest


class TestListUsers:
    """Tests for GET /api/users."""

    async def test_empty_list(self, auth_client):
        response = await auth_client.get("/api/users")
        assert response.status_code == 200
        assert response.json() == {
            "users": [],
            "totalPages": 0,
            "currentPage": 1,
            "totalCount": 0,
        }

    async def test_pagination(self, auth_client, make_user):
        for _ in range(5):
            await make_user()

        response = await auth_client.get("/api/users", params={"page": 2, "limit": 2})
        data = response.json()
        assert data["totalCount"] == 5
        assert data["totalPages"] == 3
        assert data["currentPage"] == 2
        assert len(data["users"]) == 2

    async def test_search_matches_name_or_email(self, auth_client, doctor, patient):
        by_name = await auth_client.get("/api/users", params={"search": "chikondi"})
        assert [u["email"] for u in by_name.json()["users"]] == ["dr.banda@example.com"]

        by_email = await auth_client.get("/api/users", params={"search": "thoko@"})
        assert [u["email"] for u in by_email.json()["users"]] == ["thoko@example.com"]

    async def test_filter_by_type(self, auth_client, doctor, patient):
        response = await auth_client.get("/api/users", params={"type": "doctor"})
        users = response.json()["users"]
        assert len(users) == 1
        assert users[0]["user_type"] == "doctor"
        assert users[0]["name"] == "Chikondi Banda"

    async def test_all_disables_filters(self, auth_client, doctor, patient):
        response = await auth_client.get(
            "/api/users", params={"type": "all", "status": "all"}
        )
        assert response.json()["totalCount"] == 2

    async def test_filter_by_status(self, auth_client, doctor, patient):
        response = await auth_client.get("/api/users", params={"status": "pending"})
        assert [u["id"] for u in response.json()["users"]] == [doctor.id]

    async def test_limit_out_of_range(self, auth_client):
        response = await auth_client.get("/api/users", params={"limit": 0})
        assert response.status_code == 400


class TestUserDetails:
    """Tests for GET /api/users/{id}."""

    async def test_detail_view(
        self, auth_client, doctor, patient,
        make_appointment, make_payment, make_subscription,
    ):
        await make_appointment(doctor, patient, status="completed")
        await make_appointment(doctor, patient, status="cancelled")
        await make_payment(patient, payment_status="completed", amount=Decimal("15000.00"))
        await make_payment(patient, payment_status="failed", amount=Decimal("9000.00"))
        await make_subscription(patient, plan_name="Premium")

        response = await auth_client.get(f"/api/users/{patient.id}")
        assert response.status_code == 200
        data = response.json()

        assert data["user"]["email"] == "thoko@example.com"
        assert data["currentSubscription"]["plan_name"] == "Premium"
        assert data["activityStats"] == {
            "total_appointments": 2,
            "completed_appointments": 1,
            "cancelled_appointments": 1,
            "total_payments": 2,
            "total_spent": 15000.0,
            "total_subscriptions": 1,
            "active_subscriptions": 1,
        }
        assert len(data["recentAppointments"]) == 2
        first = data["recentAppointments"][0]
        assert first["user_role"] == "patient"
        assert first["other_party_name"] == "Chikondi Banda"
        assert len(data["recentPayments"]) == 2

    async def test_detail_without_activity(self, auth_client, patient):
        response = await auth_client.get(f"/api/users/{patient.id}")
        data = response.json()
        assert data["currentSubscription"] is None
        assert data["activityStats"]["total_appointments"] == 0
        assert data["recentAppointments"] == []

    async def test_detail_not_found(self, auth_client):
        response = await auth_client.get("/api/users/9999")
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestUpdateUserStatus:
    """Tests for PATCH /api/users/{id}/status."""

    async def test_suspend_user(self, auth_client, patient, outbox):
        response = await auth_client.patch(
            f"/api/users/{patient.id}/status", json={"status": "suspended"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "User status updated successfully"
        assert data["user"]["status"] == "suspended"
        assert data["email_sent"] is None
        assert outbox == []

    @pytest.mark.parametrize("value", ["invalid_value", "SUSPENDED", "", None])
    async def test_invalid_status_does_not_mutate(
        self, auth_client, db_session, patient, value
    ):
        response = await auth_client.patch(
            f"/api/users/{patient.id}/status", json={"status": value}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid status"
        assert body["allowed"] == ["pending", "approved", "rejected", "suspended", "banned"]

        await db_session.refresh(patient)
        assert patient.status == "approved"

    async def test_missing_body_field(self, auth_client, patient):
        response = await auth_client.patch(f"/api/users/{patient.id}/status", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status"

    async def test_unknown_user(self, auth_client):
        response = await auth_client.patch(
            "/api/users/9999/status", json={"status": "banned"}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    async def test_approving_doctor_sends_email(self, auth_client, doctor, outbox):
        response = await auth_client.patch(
            f"/api/users/{doctor.id}/status", json={"status": "approved"}
        )
        assert response.status_code == 200
        assert response.json()["email_sent"] is True

        assert len(outbox) == 1
        template, data = outbox[0]
        assert template == "doctor_approved"
        assert data["to"] == "dr.banda@example.com"
        assert data["doctor_name"] == "Chikondi Banda"

    async def test_rejecting_doctor_sends_email(self, auth_client, doctor, outbox):
        await auth_client.patch(
            f"/api/users/{doctor.id}/status", json={"status": "rejected"}
        )
        assert [template for template, _ in outbox] == ["doctor_rejected"]

    async def test_email_failure_keeps_status_change(
        self, auth_client, db_session, doctor, outbox
    ):
        outbox.succeed = False
        response = await auth_client.patch(
            f"/api/users/{doctor.id}/status", json={"status": "approved"}
        )
        assert response.status_code == 200
        assert response.json()["email_sent"] is False

        await db_session.refresh(doctor)
        assert doctor.status == "approved"

    async def test_reapproving_doctor_sends_nothing(
        self, auth_client, make_user, outbox
    ):
        approved = await make_user(user_type="doctor", status="approved")
        await auth_client.patch(
            f"/api/users/{approved.id}/status", json={"status": "approved"}
        )
        assert outbox == []

    async def test_approving_patient_sends_nothing(self, auth_client, make_user, outbox):
        pending_patient = await make_user(status="pending")
        await auth_client.patch(
            f"/api/users/{pending_patient.id}/status", json={"status": "approved"}
        )
        assert outbox == []


class TestDeleteUser:
    """Tests for DELETE /api/users/{id}."""

    async def test_delete(self, auth_client, patient):
        response = await auth_client.delete(f"/api/users/{patient.id}")
        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}

        follow_up = await auth_client.get(f"/api/users/{patient.id}")
        assert follow_up.status_code == 404

    async def test_delete_unknown(self, auth_client):
        response = await auth_client.delete("/api/users/9999")
        assert response.status_code == 404


class TestPendingDoctors:
    """Tests for GET /api/pending-doctors."""

    async def test_only_pending_doctors(self, auth_client, doctor, patient, make_user):
        await make_user(user_type="doctor", status="approved")

        response = await auth_client.get("/api/pending-doctors")
        assert response.status_code == 200
        data = response.json()
        assert data["totalCount"] == 1
        assert data["doctors"][0]["id"] == doctor.id
        assert data["doctors"][0]["specialization"] == "General Practice"
