"""
Pydantic schemas for withdrawal request endpoints.

Two surfaces share these shapes:
  - the dashboard's /api/withdraw-requests (list + quick complete/fail)
  - the review flow under /api/admin/withdrawal-requests
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from admin_dashboard.schemas.common import PersonSummary


class WithdrawalResponse(BaseModel):
    id: int
    doctor_id: int
    amount: float
    payment_method: str
    status: str
    bank_name: str | None
    bank_account: str | None
    bank_branch: str | None
    account_holder_name: str | None
    mobile_provider: str | None
    mobile_number: str | None
    rejection_reason: str | None
    payment_details: dict | None
    approved_by: int | None
    approved_at: datetime | None
    paid_by: int | None
    paid_at: datetime | None
    created_at: datetime
    updated_at: datetime
    doctor: PersonSummary | None = None

    model_config = {"from_attributes": True}


class WithdrawalListResponse(BaseModel):
    withdrawals: list[WithdrawalResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class WithdrawalDetailResponse(BaseModel):
    withdrawal: WithdrawalResponse


# ---------------------------------------------------------------------------
# Dashboard quick action
# ---------------------------------------------------------------------------

class WithdrawalStatusUpdateRequest(BaseModel):
    """Request body for PATCH /api/withdraw-requests/{id}/status."""
    status: str | None = None
    # Configured admin id (e.g. "admin-1"); required when completing
    completed_by: str | None = None


class WithdrawalStatusResponse(BaseModel):
    message: str
    status: str
    withdrawal: WithdrawalResponse


# ---------------------------------------------------------------------------
# Review flow
# ---------------------------------------------------------------------------

class WithdrawalRejectRequest(BaseModel):
    rejection_reason: str = Field(min_length=1, max_length=500)


class PaymentDetails(BaseModel):
    payment_method: str | None = None
    transaction_id: str | None = None
    notes: str | None = None


class MarkAsPaidRequest(BaseModel):
    payment_details: PaymentDetails | None = None


class WithdrawalActionResponse(BaseModel):
    message: str
    withdrawal: WithdrawalResponse


class WalletTransactionResponse(BaseModel):
    id: int
    doctor_id: int
    type: str
    amount: float
    description: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkAsPaidResponse(BaseModel):
    message: str
    withdrawal: WithdrawalResponse
    transaction: WalletTransactionResponse
    new_balance: float


class WithdrawalStatsResponse(BaseModel):
    total_requests: int
    pending_requests: int
    approved_requests: int
    rejected_requests: int
    paid_requests: int
    total_amount_requested: float
    total_amount_paid: float
    total_amount_pending: float


class CompletionEmailRequest(BaseModel):
    """Request body for POST /api/admin/withdrawal-requests/send-completion-email."""
    doctor_email: EmailStr
    doctor_name: str
    amount: float
    payment_method: str
    bank_name: str | None = None
    account_holder_name: str | None = None
    completed_at: datetime | None = None
