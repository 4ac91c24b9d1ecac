"""
Admin router — the withdrawal review surface of the backend API.

Endpoints:
  GET  /api/admin/withdrawal-requests                       — Filtered, paginated list
  GET  /api/admin/withdrawal-requests/stats                 — Counts and totals per status
  POST /api/admin/withdrawal-requests/send-completion-email — Email a doctor about a payout
  GET  /api/admin/withdrawal-requests/{withdrawal_id}       — One request
  POST /api/admin/withdrawal-requests/{withdrawal_id}/approve
  POST /api/admin/withdrawal-requests/{withdrawal_id}/reject
  POST /api/admin/withdrawal-requests/{withdrawal_id}/mark-as-paid

Static paths (/stats, /send-completion-email) are declared before the
parameterized /{withdrawal_id} routes so they are matched first.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.exceptions import EmailDeliveryError
from admin_dashboard.schemas.common import MessageResponse, total_pages
from admin_dashboard.schemas.withdrawal import (
    CompletionEmailRequest,
    MarkAsPaidRequest,
    MarkAsPaidResponse,
    WithdrawalActionResponse,
    WithdrawalDetailResponse,
    WithdrawalListResponse,
    WithdrawalRejectRequest,
    WithdrawalStatsResponse,
)
from admin_dashboard.services import email_service, withdrawal_service

router = APIRouter()


# ---------------------------------------------------------------------------
# Collection endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/withdrawal-requests",
    response_model=WithdrawalListResponse,
    summary="[Admin] List withdrawal requests",
)
async def admin_list_withdrawal_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = Query(None, description="Filter by status, or all"),
    doctor_id: int | None = None,
    date_from: date | None = Query(None, description="Created on or after (YYYY-MM-DD)"),
    date_to: date | None = Query(None, description="Created on or before (YYYY-MM-DD)"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    withdrawals, total = await withdrawal_service.list_withdrawals(
        db,
        page=page,
        limit=limit,
        status=status,
        doctor_id=doctor_id,
        date_from=date_from,
        date_to=date_to,
    )
    return {
        "withdrawals": withdrawals,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.get(
    "/withdrawal-requests/stats",
    response_model=WithdrawalStatsResponse,
    summary="[Admin] Withdrawal statistics",
)
async def admin_withdrawal_stats(
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await withdrawal_service.get_stats(db)


@router.post(
    "/withdrawal-requests/send-completion-email",
    response_model=MessageResponse,
    summary="[Admin] Send a withdrawal completion email",
)
async def admin_send_completion_email(
    request: CompletionEmailRequest,
    admin: AdminAccount = Depends(get_current_admin),
):
    """
    Send the "withdrawal completed" email for a payout settled elsewhere.

    Unlike the automatic email on completion, a delivery failure here is
    reported to the caller as a 500.
    """
    sent = await email_service.send_withdrawal_completed_email(**request.model_dump())
    if not sent:
        raise EmailDeliveryError()
    return {"message": "Email sent successfully"}


# ---------------------------------------------------------------------------
# Single-request endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/withdrawal-requests/{withdrawal_id}",
    response_model=WithdrawalDetailResponse,
    summary="[Admin] Get a withdrawal request",
)
async def admin_get_withdrawal_request(
    withdrawal_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return {"withdrawal": await withdrawal_service.get_withdrawal(db, withdrawal_id)}


@router.post(
    "/withdrawal-requests/{withdrawal_id}/approve",
    response_model=WithdrawalActionResponse,
    summary="[Admin] Approve a pending withdrawal request",
)
async def admin_approve_withdrawal_request(
    withdrawal_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    withdrawal = await withdrawal_service.approve(db, withdrawal_id, admin)
    return {"message": "Withdrawal request approved successfully", "withdrawal": withdrawal}


@router.post(
    "/withdrawal-requests/{withdrawal_id}/reject",
    response_model=WithdrawalActionResponse,
    summary="[Admin] Reject a withdrawal request",
)
async def admin_reject_withdrawal_request(
    withdrawal_id: int,
    request: WithdrawalRejectRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    withdrawal = await withdrawal_service.reject(
        db, withdrawal_id, admin, request.rejection_reason,
    )
    return {"message": "Withdrawal request rejected successfully", "withdrawal": withdrawal}


@router.post(
    "/withdrawal-requests/{withdrawal_id}/mark-as-paid",
    response_model=MarkAsPaidResponse,
    summary="[Admin] Pay out an approved withdrawal request",
)
async def admin_mark_withdrawal_as_paid(
    withdrawal_id: int,
    request: MarkAsPaidRequest | None = None,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Debit the doctor's wallet and mark the request PAID.

    The optional ``payment_details`` (method, gateway transaction id, notes)
    are stored on the request as given.
    """
    payment_details = None
    if request is not None and request.payment_details is not None:
        payment_details = request.payment_details.model_dump(exclude_none=True)

    withdrawal, transaction, new_balance = await withdrawal_service.mark_as_paid(
        db, withdrawal_id, admin, payment_details,
    )
    return {
        "message": "Withdrawal request marked as paid successfully",
        "withdrawal": withdrawal,
        "transaction": transaction,
        "new_balance": float(new_balance),
    }
