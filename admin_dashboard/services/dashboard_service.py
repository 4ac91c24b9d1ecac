"""
Dashboard service — headline numbers for the admin overview page.

Revenue is the sum of active subscription prices. Plans sold in USD are
reported in MWK at the fixed USD_TO_MWK_RATE so all figures share one
currency.

"Today" and "this month" are computed in UTC.
"""

from datetime import datetime, timezone

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import settings
from admin_dashboard.models.appointment import Appointment, AppointmentStatus
from admin_dashboard.models.subscription import Subscription
from admin_dashboard.models.user import User, UserType
from admin_dashboard.models.withdrawal import WithdrawalRequest, WithdrawalStatus


def _revenue_in_mwk():
    return func.coalesce(
        func.sum(
            case(
                (Subscription.plan_currency == "USD",
                 Subscription.plan_price * settings.USD_TO_MWK_RATE),
                else_=Subscription.plan_price,
            )
        ),
        0,
    )


async def _count(db: AsyncSession, model, *filters) -> int:
    return await db.scalar(select(func.count()).select_from(model).where(*filters)) or 0


async def _revenue(db: AsyncSession, *filters) -> float:
    total = await db.scalar(
        select(_revenue_in_mwk()).where(Subscription.is_active.is_(True), *filters)
    )
    return float(total or 0)


async def get_dashboard_stats(db: AsyncSession) -> dict:
    """
    Collect the overview counters and the subscription distribution.

    Returns:
        Dict with "stats" (see DashboardStats) and "subscriptionData", a
        list of {"name": plan name, "value": active subscriptions}.
    """
    now = datetime.now(timezone.utc)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    start_of_month = start_of_day.replace(day=1)

    stats = {
        "totalUsers": await _count(db, User),
        "totalDoctors": await _count(db, User, User.user_type == UserType.DOCTOR.value),
        "totalPatients": await _count(db, User, User.user_type == UserType.PATIENT.value),
        "activeSubscriptions": await _count(db, Subscription, Subscription.is_active.is_(True)),
        "totalRevenue": await _revenue(db),
        "monthlyRevenue": await _revenue(db, Subscription.created_at >= start_of_month),
        "todayRevenue": await _revenue(db, Subscription.created_at >= start_of_day),
        "totalAppointments": await _count(db, Appointment),
        "pendingAppointments": await _count(
            db, Appointment, Appointment.status == AppointmentStatus.PENDING.value
        ),
        "completedAppointments": await _count(
            db, Appointment, Appointment.status == AppointmentStatus.COMPLETED.value
        ),
        "todayAppointments": await _count(db, Appointment, Appointment.created_at >= start_of_day),
        "pendingWithdrawals": await _count(
            db, WithdrawalRequest, WithdrawalRequest.status == WithdrawalStatus.PENDING.value
        ),
    }

    distribution = await db.execute(
        select(Subscription.plan_name, func.count())
        .where(Subscription.is_active.is_(True))
        .group_by(Subscription.plan_name)
        .order_by(func.count().desc(), Subscription.plan_name)
    )
    subscription_data = [
        {"name": plan_name, "value": count} for plan_name, count in distribution.all()
    ]

    return {"stats": stats, "subscriptionData": subscription_data}
