"""
Users router — user management for the admin dashboard.

Endpoints:
  GET    /api/users                 — Paginated list (search, type, status filters)
  GET    /api/users/{user_id}       — Detail view with subscription and activity
  PATCH  /api/users/{user_id}/status — Change a user's status
  DELETE /api/users/{user_id}       — Delete a user
  GET    /api/pending-doctors       — Doctors awaiting review (mounted separately)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.common import MessageResponse, StatusUpdateRequest, total_pages
from admin_dashboard.schemas.user import (
    PendingDoctorListResponse,
    UserDetailResponse,
    UserListResponse,
    UserStatusResponse,
)
from admin_dashboard.services import user_service

router = APIRouter()
pending_doctors_router = APIRouter()


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, description="Match first name, last name or email"),
    type: str | None = Query(None, description="patient, doctor, admin or all"),
    status: str | None = Query(None, description="Filter by status, or all"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    users, total = await user_service.list_users(
        db, page=page, limit=limit, search=search, user_type=type, status=status,
    )
    return {
        "users": users,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.get("/{user_id}", response_model=UserDetailResponse, summary="Get user details")
async def get_user(
    user_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Full profile of one user for the detail drawer: current subscription,
    activity counters, and the five most recent appointments and payments.
    """
    return await user_service.get_user_details(db, user_id)


@router.patch(
    "/{user_id}/status",
    response_model=UserStatusResponse,
    summary="Update a user's status",
)
async def update_user_status(
    user_id: int,
    request: StatusUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Set status to one of: pending, approved, rejected, suspended, banned.

    Approving or rejecting a doctor also emails them; ``email_sent`` reports
    whether that email went out.
    """
    user, email_sent = await user_service.update_user_status(db, user_id, request.status)
    return {
        "message": "User status updated successfully",
        "user": user,
        "email_sent": email_sent,
    }


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete a user")
async def delete_user(
    user_id: int,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")


@pending_doctors_router.get(
    "",
    response_model=PendingDoctorListResponse,
    summary="List doctors awaiting approval",
)
async def list_pending_doctors(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = None,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    doctors, total = await user_service.list_pending_doctors(
        db, page=page, limit=limit, search=search,
    )
    return {
        "doctors": doctors,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }
