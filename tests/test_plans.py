"""
Tests for the plan catalogue endpoints.

These tests verify:
  - Create (201), list, partial update and delete
  - Validation failures are reported as 400
  - Missing plans are reported as 404
"""

import pytest


PLAN_BODY = {
    "name": "Executive",
    "price": 25000,
    "currency": "MWK",
    "duration": 30,
    "text_sessions": 10,
    "voice_calls": 5,
    "video_calls": 3,
    "features": ["Unlimited chat", "Priority booking"],
}


class TestCreatePlan:
    """Tests for POST /api/plans."""

    async def test_create(self, auth_client):
        response = await auth_client.post("/api/plans", json=PLAN_BODY)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Plan created successfully"
        plan = data["plan"]
        assert plan["name"] == "Executive"
        assert plan["price"] == 25000.0
        assert plan["features"] == ["Unlimited chat", "Priority booking"]
        assert plan["is_active"] is True

    async def test_non_positive_price(self, auth_client):
        response = await auth_client.post("/api/plans", json={**PLAN_BODY, "price": 0})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    async def test_unknown_currency(self, auth_client):
        response = await auth_client.post("/api/plans", json={**PLAN_BODY, "currency": "EUR"})
        assert response.status_code == 400

    async def test_missing_name(self, auth_client):
        body = {key: value for key, value in PLAN_BODY.items() if key != "name"}
        response = await auth_client.post("/api/plans", json=body)
        assert response.status_code == 400


class TestListPlans:
    """Tests for GET /api/plans."""

    async def test_ordered_by_price(self, auth_client, make_plan):
        await make_plan(name="Premium", price=30000)
        await make_plan(name="Basic", price=10000)

        response = await auth_client.get("/api/plans")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["plans"]] == ["Basic", "Premium"]


class TestUpdatePlan:
    """Tests for PATCH /api/plans/{id}."""

    async def test_partial_update(self, auth_client, make_plan):
        plan = await make_plan()

        response = await auth_client.patch(
            f"/api/plans/{plan.id}", json={"price": 12000, "is_active": False}
        )
        assert response.status_code == 200
        updated = response.json()["plan"]
        assert updated["price"] == 12000.0
        assert updated["is_active"] is False
        # Untouched fields keep their values
        assert updated["name"] == "Basic"
        assert updated["text_sessions"] == 5

    async def test_invalid_update(self, auth_client, make_plan):
        plan = await make_plan()
        response = await auth_client.patch(f"/api/plans/{plan.id}", json={"voice_calls": -1})
        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["name", "price", "currency", "features", "is_active"])
    async def test_null_field_rejected(self, auth_client, db_session, make_plan, field):
        plan = await make_plan()

        response = await auth_client.patch(f"/api/plans/{plan.id}", json={field: None})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

        await db_session.refresh(plan)
        assert plan.name == "Basic"
        assert plan.is_active is True

    async def test_unknown_plan(self, auth_client):
        response = await auth_client.patch("/api/plans/9999", json={"name": "Gold"})
        assert response.status_code == 404
        assert response.json() == {"message": "Plan not found"}


class TestDeletePlan:
    """Tests for DELETE /api/plans/{id}."""

    async def test_delete(self, auth_client, make_plan):
        plan = await make_plan()

        response = await auth_client.delete(f"/api/plans/{plan.id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Plan deleted successfully"}

        listing = await auth_client.get("/api/plans")
        assert listing.json()["plans"] == []

    async def test_unknown_plan(self, auth_client):
        response = await auth_client.delete("/api/plans/9999")
        assert response.status_code == 404
