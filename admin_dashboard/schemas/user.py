"""
Pydantic schemas for the user management endpoints.

Responses mirror the users table closely; ``name`` is derived from first
and last name. The detail view bundles the user's current subscription,
activity counters and the five most recent appointments and payments.
"""

from datetime import date, datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    name: str
    email: str
    user_type: str
    status: str
    specialization: str | None = None
    medical_licence: str | None = None
    city: str | None = None
    country: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    users: list[UserResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class PendingDoctorListResponse(BaseModel):
    doctors: list[UserResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class UserStatusResponse(BaseModel):
    message: str
    user: UserResponse
    # None when the status change doesn't trigger an email
    email_sent: bool | None = None


class ActivityStats(BaseModel):
    total_appointments: int
    completed_appointments: int
    cancelled_appointments: int
    total_payments: int
    total_spent: float
    total_subscriptions: int
    active_subscriptions: int


class CurrentSubscription(BaseModel):
    id: int
    plan_id: int | None
    plan_name: str
    plan_price: float
    plan_currency: str
    status: str
    is_active: bool
    start_date: datetime | None
    end_date: datetime | None

    model_config = {"from_attributes": True}


class RecentAppointment(BaseModel):
    id: int
    appointment_date: date | None
    appointment_time: str | None
    status: str
    type: str
    user_role: str
    other_party_name: str | None
    other_party_email: str | None


class RecentPayment(BaseModel):
    id: int
    amount: float
    currency: str
    status: str
    payment_method: str | None
    payment_gateway: str | None
    transaction_id: str | None
    created_at: datetime


class UserDetailResponse(BaseModel):
    user: UserResponse
    currentSubscription: CurrentSubscription | None
    activityStats: ActivityStats
    recentAppointments: list[RecentAppointment]
    recentPayments: list[RecentPayment]
