"""Pydantic schemas for payment transaction endpoints."""

from datetime import datetime

from pydantic import BaseModel

from admin_dashboard.schemas.common import PersonSummary


class PaymentResponse(BaseModel):
    id: int
    user_id: int | None
    amount: float
    currency: str
    payment_status: str
    payment_method: str | None
    gateway: str | None
    transaction_id: str | None
    reference: str | None
    created_at: datetime
    user: PersonSummary | None = None

    model_config = {"from_attributes": True}


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class PaymentStatusResponse(BaseModel):
    message: str
    payment: PaymentResponse
