"""
Withdraw requests router — the dashboard's payout screen.

Endpoints:
  GET   /api/withdraw-requests                     — Paginated list
  GET   /api/withdraw-requests/{withdrawal_id}     — One request
  PATCH /api/withdraw-requests/{withdrawal_id}/status — Mark completed or failed

The step-by-step review flow (approve, reject, mark as paid) lives in the
admin router under /api/admin/withdrawal-requests.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.common import total_pages
from admin_dashboard.schemas.withdrawal import (
    WithdrawalDetailResponse,
    WithdrawalListResponse,
    WithdrawalStatusResponse,
    WithdrawalStatusUpdateRequest,
)
from admin_dashboard.services import withdrawal_service

router = APIRouter()


@router.get("", response_model=WithdrawalListResponse, summary="List withdrawal requests")
async def list_withdraw_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str | None = Query(None, description="Filter by status, or all"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    withdrawals, total = await withdrawal_service.list_withdrawals(
        db, page=page, limit=limit, status=status,
    )
    return {
        "withdrawals": withdrawals,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.get(
    "/{withdrawal_id}",
    response_model=WithdrawalDetailResponse,
    summary="Get a withdrawal request",
)
async def get_withdraw_request(
    withdrawal_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"withdrawal": await withdrawal_service.get_withdrawal(db, withdrawal_id)}


@router.patch(
    "/{withdrawal_id}/status",
    response_model=WithdrawalStatusResponse,
    summary="Complete or fail a withdrawal request",
)
async def update_withdraw_request_status(
    withdrawal_id: int,
    request: WithdrawalStatusUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Settle a request.

    ``completed`` needs ``completed_by`` (a configured admin id). It debits
    the doctor's wallet and emails the doctor; a failed email is logged and
    does not fail the request.
    """
    withdrawal = await withdrawal_service.update_withdrawal_status(
        db, withdrawal_id, request.status, completed_by=request.completed_by,
    )
    return {
        "message": f"Withdrawal request {withdrawal.status} successfully",
        "status": withdrawal.status,
        "withdrawal": withdrawal,
    }
