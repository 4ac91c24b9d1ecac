"""
Payments router.

Endpoints:
  GET   /api/payments                    — Paginated list (status, gateway filters)
  PATCH /api/payments/{payment_id}/status — Reconcile a payment's status
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.common import StatusUpdateRequest, total_pages
from admin_dashboard.schemas.payment import PaymentListResponse, PaymentStatusResponse
from admin_dashboard.services import payment_service

router = APIRouter()


@router.get("", response_model=PaymentListResponse, summary="List payment transactions")
async def list_payments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str | None = Query(None, description="pending, completed, failed, refunded or all"),
    gateway: str | None = Query(None, description="paychangu, stripe, paypal or all"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    payments, total = await payment_service.list_payments(
        db, page=page, limit=limit, status=status, gateway=gateway,
    )
    return {
        "payments": payments,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.patch(
    "/{payment_id}/status",
    response_model=PaymentStatusResponse,
    summary="Update a payment's status",
)
async def update_payment_status(
    payment_id: int,
    request: StatusUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Set status to one of: pending, completed, failed, refunded."""
    payment = await payment_service.update_payment_status(db, payment_id, request.status)
    return {
        "message": "Payment status updated successfully",
        "payment": payment,
    }
