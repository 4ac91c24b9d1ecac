"""
User service — listing, reviewing and moderating platform users.

This module handles:
  - Paginated listing with search (name/email), type and status filters
  - The pending-doctor review queue
  - The user detail view (subscription, activity counters, recent history)
  - Status changes, including the approval/rejection emails for doctors
  - Deletion

Email side effects:
  When a DOCTOR moves to APPROVED or REJECTED the matching email is sent
  after the status change. Email failure is logged by the email service and
  reported as ``email_sent=False``; the status change stands.
"""

import logging

from sqlalchemy import select, func, or_, case
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.exceptions import NotFoundError
from admin_dashboard.models.user import User, UserStatus, UserType
from admin_dashboard.models.appointment import Appointment, AppointmentStatus
from admin_dashboard.models.payment import PaymentTransaction, PaymentStatus
from admin_dashboard.models.subscription import Subscription
from admin_dashboard.services import email_service
from admin_dashboard.services.status import parse_status

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


def _search_clause(search: str):
    pattern = f"%{search}%"
    return or_(
        User.first_name.ilike(pattern),
        User.last_name.ilike(pattern),
        User.email.ilike(pattern),
    )


async def list_users(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
    user_type: str | None = None,
    status: str | None = None,
) -> tuple[list[User], int]:
    """
    List users, newest first.

    ``user_type`` and ``status`` of None or "all" disable that filter.

    Returns:
        Tuple of (users on this page, total matching count).
    """
    filters = []
    if search:
        filters.append(_search_clause(search))
    if user_type and user_type != "all":
        filters.append(User.user_type == user_type)
    if status and status != "all":
        filters.append(User.status == status)

    total = await db.scalar(select(func.count()).select_from(User).where(*filters))

    result = await db.execute(
        select(User)
        .where(*filters)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total or 0


async def list_pending_doctors(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
) -> tuple[list[User], int]:
    """Doctors awaiting review."""
    return await list_users(
        db,
        page=page,
        limit=limit,
        search=search,
        user_type=UserType.DOCTOR.value,
        status=UserStatus.PENDING.value,
    )


async def get_user(db: AsyncSession, user_id: int) -> User:
    """
    Raises:
        NotFoundError: If the user doesn't exist.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


async def get_user_details(db: AsyncSession, user_id: int) -> dict:
    """
    Assemble the user detail view.

    Returns:
        Dict with "user", "currentSubscription", "activityStats",
        "recentAppointments" and "recentPayments".

    Raises:
        NotFoundError: If the user doesn't exist.
    """
    user = await get_user(db, user_id)

    current_subscription = await db.scalar(
        select(Subscription)
        .where(Subscription.user_id == user_id, Subscription.is_active.is_(True))
        .order_by(Subscription.created_at.desc())
        .limit(1)
    )

    involves_user = or_(Appointment.patient_id == user_id, Appointment.doctor_id == user_id)
    appointment_counts = (await db.execute(
        select(
            func.count(),
            func.count(case((Appointment.status == AppointmentStatus.COMPLETED.value, 1))),
            func.count(case((Appointment.status == AppointmentStatus.CANCELLED.value, 1))),
        ).where(involves_user)
    )).one()

    payment_counts = (await db.execute(
        select(
            func.count(),
            func.coalesce(
                func.sum(case(
                    (PaymentTransaction.payment_status == PaymentStatus.COMPLETED.value,
                     PaymentTransaction.amount),
                    else_=0,
                )),
                0,
            ),
        ).where(PaymentTransaction.user_id == user_id)
    )).one()

    subscription_counts = (await db.execute(
        select(
            func.count(),
            func.count(case((Subscription.is_active.is_(True), 1))),
        ).where(Subscription.user_id == user_id)
    )).one()

    activity_stats = {
        "total_appointments": appointment_counts[0],
        "completed_appointments": appointment_counts[1],
        "cancelled_appointments": appointment_counts[2],
        "total_payments": payment_counts[0],
        "total_spent": float(payment_counts[1] or 0),
        "total_subscriptions": subscription_counts[0],
        "active_subscriptions": subscription_counts[1],
    }

    appointments = (await db.execute(
        select(Appointment)
        .where(involves_user)
        .order_by(Appointment.appointment_date.desc(), Appointment.created_at.desc())
        .limit(RECENT_LIMIT)
    )).scalars().all()

    recent_appointments = []
    for appointment in appointments:
        is_patient = appointment.patient_id == user_id
        other = appointment.doctor if is_patient else appointment.patient
        recent_appointments.append({
            "id": appointment.id,
            "appointment_date": appointment.appointment_date,
            "appointment_time": appointment.appointment_time,
            "status": appointment.status,
            "type": appointment.appointment_type,
            "user_role": "patient" if is_patient else "doctor",
            "other_party_name": other.name if other else None,
            "other_party_email": other.email if other else None,
        })

    payments = (await db.execute(
        select(PaymentTransaction)
        .where(PaymentTransaction.user_id == user_id)
        .order_by(PaymentTransaction.created_at.desc())
        .limit(RECENT_LIMIT)
    )).scalars().all()

    recent_payments = [
        {
            "id": payment.id,
            "amount": float(payment.amount),
            "currency": payment.currency,
            "status": payment.payment_status,
            "payment_method": payment.payment_method,
            "payment_gateway": payment.gateway,
            "transaction_id": payment.transaction_id,
            "created_at": payment.created_at,
        }
        for payment in payments
    ]

    return {
        "user": user,
        "currentSubscription": current_subscription,
        "activityStats": activity_stats,
        "recentAppointments": recent_appointments,
        "recentPayments": recent_payments,
    }


async def update_user_status(
    db: AsyncSession,
    user_id: int,
    status: str | None,
) -> tuple[User, bool | None]:
    """
    Set a user's status.

    Args:
        db: Database session.
        user_id: The user to update.
        status: New status; must be a UserStatus value.

    Returns:
        Tuple of (updated User, email result). The email result is None
        when the change doesn't notify anyone.

    Raises:
        InvalidStatusError: If status is not a UserStatus value.
        NotFoundError: If the user doesn't exist.
    """
    new_status = parse_status(status, UserStatus)
    user = await get_user(db, user_id)

    previous = user.status
    user.status = new_status
    await db.flush()
    logger.info("User %s status changed from %s to %s", user.id, previous, new_status)

    email_sent = None
    if user.user_type == UserType.DOCTOR.value and new_status != previous:
        if new_status == UserStatus.APPROVED.value:
            email_sent = await email_service.send_doctor_approved_email(user)
        elif new_status == UserStatus.REJECTED.value:
            email_sent = await email_service.send_doctor_rejected_email(user)

    return user, email_sent


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """
    Delete a user. Related rows are removed by the database's ON DELETE rules.

    Raises:
        NotFoundError: If the user doesn't exist.
    """
    user = await get_user(db, user_id)
    await db.delete(user)
    await db.flush()
    logger.info("User %s deleted", user_id)
