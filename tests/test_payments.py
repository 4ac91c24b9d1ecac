"""
Tests for payment transaction endpoints.

These tests verify:
  - Listing with the payer's summary and status/gateway filters
  - Status updates follow the shared rules (400 / 404 / 200)
"""


class TestListPayments:
    """Tests for GET /api/payments."""

    async def test_list_with_user(self, auth_client, patient, make_payment):
        await make_payment(patient)

        response = await auth_client.get("/api/payments")
        assert response.status_code == 200
        payment = response.json()["payments"][0]
        assert payment["amount"] == 15000.0
        assert payment["payment_status"] == "pending"
        assert payment["user"]["email"] == "thoko@example.com"

    async def test_filters(self, auth_client, patient, make_payment):
        await make_payment(patient, payment_status="completed", gateway="paychangu")
        await make_payment(patient, payment_status="completed", gateway="stripe")
        await make_payment(patient, payment_status="failed", gateway="paychangu")

        completed = await auth_client.get("/api/payments", params={"status": "completed"})
        assert completed.json()["totalCount"] == 2

        stripe = await auth_client.get(
            "/api/payments", params={"status": "completed", "gateway": "stripe"}
        )
        assert stripe.json()["totalCount"] == 1

    async def test_pagination(self, auth_client, patient, make_payment):
        for _ in range(3):
            await make_payment(patient)

        response = await auth_client.get("/api/payments", params={"limit": 2, "page": 2})
        data = response.json()
        assert data["totalPages"] == 2
        assert len(data["payments"]) == 1


class TestUpdatePaymentStatus:
    """Tests for PATCH /api/payments/{id}/status."""

    async def test_refund(self, auth_client, patient, make_payment):
        payment = await make_payment(patient, payment_status="completed")

        response = await auth_client.patch(
            f"/api/payments/{payment.id}/status", json={"status": "refunded"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Payment status updated successfully"
        assert data["payment"]["payment_status"] == "refunded"

    async def test_invalid_value(self, auth_client, db_session, patient, make_payment):
        payment = await make_payment(patient)

        response = await auth_client.patch(
            f"/api/payments/{payment.id}/status", json={"status": "invalid_value"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status"

        await db_session.refresh(payment)
        assert payment.payment_status == "pending"

    async def test_unknown_payment(self, auth_client):
        response = await auth_client.patch(
            "/api/payments/9999/status", json={"status": "failed"}
        )
        assert response.status_code == 404
        assert response.json() == {"message": "Payment not found"}

    async def test_invalid_value_checked_before_lookup(self, auth_client):
        """A bad status is reported even when the id doesn't exist."""
        response = await auth_client.patch(
            "/api/payments/9999/status", json={"status": "invalid_value"}
        )
        assert response.status_code == 400
