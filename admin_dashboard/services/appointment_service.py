"""
Appointment service — listing appointments and overriding their status.

Search matches the doctor's or the patient's name/email, so the query
joins the users table twice under aliases.
"""

import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from admin_dashboard.exceptions import NotFoundError
from admin_dashboard.models.appointment import Appointment, AppointmentStatus
from admin_dashboard.models.user import User
from admin_dashboard.services.status import parse_status

logger = logging.getLogger(__name__)


async def list_appointments(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    status: str | None = None,
    appointment_type: str | None = None,
) -> tuple[list[Appointment], int]:
    """
    List appointments, newest first.

    Returns:
        Tuple of (appointments on this page, total matching count).
    """
    doctor = aliased(User)
    patient = aliased(User)

    query = (
        select(Appointment)
        .join(doctor, Appointment.doctor_id == doctor.id)
        .join(patient, Appointment.patient_id == patient.id)
    )

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            doctor.first_name.ilike(pattern),
            doctor.last_name.ilike(pattern),
            doctor.email.ilike(pattern),
            patient.first_name.ilike(pattern),
            patient.last_name.ilike(pattern),
            patient.email.ilike(pattern),
        ))
    if status and status != "all":
        query = query.where(Appointment.status == status)
    if appointment_type and appointment_type != "all":
        query = query.where(Appointment.appointment_type == appointment_type)

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    result = await db.execute(
        query
        .order_by(Appointment.created_at.desc(), Appointment.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total or 0


async def update_appointment_status(
    db: AsyncSession,
    appointment_id: int,
    status: str | None,
) -> Appointment:
    """
    Set an appointment's status.

    Raises:
        InvalidStatusError: If status is not an AppointmentStatus value.
        NotFoundError: If the appointment doesn't exist.
    """
    new_status = parse_status(status, AppointmentStatus)

    appointment = await db.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFoundError("Appointment")

    appointment.status = new_status
    await db.flush()
    logger.info("Appointment %s status set to %s", appointment_id, new_status)
    return appointment
