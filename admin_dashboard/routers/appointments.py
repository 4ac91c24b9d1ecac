"""
Appointments router.

Endpoints:
  GET   /api/appointments                        — Paginated list with filters
  PATCH /api/appointments/{appointment_id}/status — Override an appointment's status
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.database import get_db
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.appointment import AppointmentListResponse, AppointmentStatusResponse
from admin_dashboard.schemas.common import StatusUpdateRequest, total_pages
from admin_dashboard.services import appointment_service

router = APIRouter()


@router.get("", response_model=AppointmentListResponse, summary="List appointments")
async def list_appointments(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, description="Match doctor or patient name/email"),
    status: str | None = Query(None, description="Filter by status, or all"),
    type: str | None = Query(None, description="text, voice, video, call or all"),
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    appointments, total = await appointment_service.list_appointments(
        db, page=page, limit=limit, search=search, status=status, appointment_type=type,
    )
    return {
        "appointments": appointments,
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "totalCount": total,
    }


@router.patch(
    "/{appointment_id}/status",
    response_model=AppointmentStatusResponse,
    summary="Update an appointment's status",
)
async def update_appointment_status(
    appointment_id: int,
    request: StatusUpdateRequest,
    admin: AdminAccount = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Set status to one of: pending, confirmed, completed, cancelled."""
    appointment = await appointment_service.update_appointment_status(
        db, appointment_id, request.status,
    )
    return {
        "message": "Appointment status updated successfully",
        "appointment": appointment,
    }
