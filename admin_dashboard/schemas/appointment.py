"""Pydantic schemas for appointment endpoints."""

from datetime import date, datetime

from pydantic import BaseModel

from admin_dashboard.schemas.common import PersonSummary


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    patient_id: int
    appointment_type: str
    status: str
    appointment_date: date | None
    appointment_time: str | None
    duration_minutes: int | None
    reason: str | None
    created_at: datetime
    doctor: PersonSummary | None = None
    patient: PersonSummary | None = None

    model_config = {"from_attributes": True}


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]
    totalPages: int
    currentPage: int
    totalCount: int


class AppointmentStatusResponse(BaseModel):
    message: str
    appointment: AppointmentResponse
