"""
Subscriptions and plans routers.

Endpoints:
  GET    /api/subscriptions                         — Paginated list
  PATCH  /api/subscriptions/{subscription_id}/status — Change a subscription's status
  GET    /api/plans                                 — List all plans
  POST   /api/plans                                 — Create a plan
  PATCH  /api/plans/{plan_id}                       — Edit a plan
  DELETE /api/plans/{plan_id}                       — Delete a plan
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.common import MessageResponse, StatusUpdateRequest, total_pages
from admin_dashboard.schemas.subscription import (
    PlanCreateRequest,
    PlanListResponse,
    PlanMutationResponse,
    PlanUpdateRequest,
    SubscriptionListResponse,
    SubscriptionStatusResponse,
)
from admin_dashboard.services import subscription_service

router = APIRouter()
plans_router = APIRouter()


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

@router.get("", response_model=SubscriptionListResponse, summary="List subscriptions")
async def list_subscriptions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    active: bool | None = Query(None, description="Only active (true) or inactive (false)"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    subscriptions, total = await subscription_service.list_subscriptions(
        db, page=page, limit=limit, active=active,
    )
    return {
        "subscriptions": subscriptions,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.patch(
    "/{subscription_id}/status",
    response_model=SubscriptionStatusResponse,
    summary="Update a subscription's status",
)
async def update_subscription_status(
    subscription_id: int,
    request: StatusUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Set status to one of: active, inactive, expired, cancelled."""
    subscription = await subscription_service.update_subscription_status(
        db, subscription_id, request.status,
    )
    return {
        "message": "Subscription status updated successfully",
        "subscription": subscription,
    }


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

@plans_router.get("", response_model=PlanListResponse, summary="List plans")
async def list_plans(
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"plans": await subscription_service.list_plans(db)}


@plans_router.post(
    "",
    response_model=PlanMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a plan",
)
async def create_plan(
    request: PlanCreateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    plan = await subscription_service.create_plan(db, **request.model_dump())
    return {"message": "Plan created successfully", "plan": plan}


@plans_router.patch("/{plan_id}", response_model=PlanMutationResponse, summary="Update a plan")
async def update_plan(
    plan_id: int,
    request: PlanUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Only the fields present in the body are changed."""
    plan = await subscription_service.update_plan(
        db, plan_id, **request.model_dump(exclude_unset=True),
    )
    return {"message": "Plan updated successfully", "plan": plan}


@plans_router.delete("/{plan_id}", response_model=MessageResponse, summary="Delete a plan")
async def delete_plan(
    plan_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await subscription_service.delete_plan(db, plan_id)
    return {"message": "Plan deleted successfully"}
