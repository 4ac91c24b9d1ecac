"""
Admins router.

Endpoints:
  GET /api/admins — List the configured admin accounts (no password hashes)

The withdrawal screen uses this list to choose who completed a payout.
"""

from fastapi import APIRouter, Depends

from admin_dashboard.config import AdminAccount
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.auth import AdminListResponse
from admin_dashboard.services import auth_service

router = APIRouter()


@router.get("", response_model=AdminListResponse, summary="List admin accounts")
async def list_admins(admin: AdminAccount = Depends(get_current_admin)):
    return AdminListResponse(
        admins=[account.model_dump() for account in auth_service.list_admins()]
    )
