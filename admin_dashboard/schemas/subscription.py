"""
Pydantic schemas for subscriptions and plans.

Plan create/update requests are validated here (positive price, known
currency, non-negative allowances); a violation is reported as 400.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from admin_dashboard.schemas.common import PersonSummary


class SubscriptionResponse(BaseModel):
    id: int
    user_id: int
    plan_id: int | None
    plan_name: str
    plan_price: float
    plan_currency: str
    status: str
    is_active: bool
    start_date: datetime | None
    end_date: datetime | None
    created_at: datetime
    user: PersonSummary | None = None

    model_config = {"from_attributes": True}


class SubscriptionListResponse(BaseModel):
    subscriptions: list[SubscriptionResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class SubscriptionStatusResponse(BaseModel):
    message: str
    subscription: SubscriptionResponse


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

class PlanCreateRequest(BaseModel):
    """Request body for POST /api/plans."""
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(gt=0)
    currency: Literal["MWK", "USD"] = "MWK"
    duration: int = Field(default=30, ge=1)
    text_sessions: int = Field(default=0, ge=0)
    voice_calls: int = Field(default=0, ge=0)
    video_calls: int = Field(default=0, ge=0)
    features: list[str] = []
    is_active: bool = True


class PlanUpdateRequest(BaseModel):
    """Request body for PATCH /api/plans/{id}. Omitted fields are left unchanged."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, gt=0)
    currency: Literal["MWK", "USD"] | None = None
    duration: int | None = Field(default=None, ge=1)
    text_sessions: int | None = Field(default=None, ge=0)
    voice_calls: int | None = Field(default=None, ge=0)
    video_calls: int | None = Field(default=None, ge=0)
    features: list[str] | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        # Every plan column is NOT NULL; omit a field to leave it unchanged
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class PlanResponse(BaseModel):
    id: int
    name: str
    price: float
    currency: str
    duration: int
    text_sessions: int
    voice_calls: int
    video_calls: int
    features: list[str]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PlanListResponse(BaseModel):
    plans: list[PlanResponse]


class PlanMutationResponse(BaseModel):
    message: str
    plan: PlanResponse
