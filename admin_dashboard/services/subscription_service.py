"""
Subscription and plan service.

Subscriptions:
  Listing plus a status override. ``is_active`` is kept in step with
  ``status`` on every change.

Plans:
  Plain CRUD for the plan catalogue. Editing a plan never rewrites existing
  subscriptions, which carry their own copy of name/price/currency.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.exceptions import NotFoundError
from admin_dashboard.models.subscription import Plan, Subscription, SubscriptionStatus
from admin_dashboard.services.status import parse_status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

async def list_subscriptions(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    active: bool | None = None,
) -> tuple[list[Subscription], int]:
    filters = []
    if active is not None:
        filters.append(Subscription.is_active.is_(active))

    total = await db.scalar(
        select(func.count()).select_from(Subscription).where(*filters)
    )
    result = await db.execute(
        select(Subscription)
        .where(*filters)
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total or 0


async def update_subscription_status(
    db: AsyncSession,
    subscription_id: int,
    status: str | None,
) -> Subscription:
    """
    Set a subscription's status and the matching ``is_active`` flag.

    Raises:
        InvalidStatusError: If status is not a SubscriptionStatus value.
        NotFoundError: If the subscription doesn't exist.
    """
    new_status = parse_status(status, SubscriptionStatus)

    subscription = await db.get(Subscription, subscription_id)
    if subscription is None:
        raise NotFoundError("Subscription")

    subscription.status = new_status
    subscription.is_active = new_status == SubscriptionStatus.ACTIVE.value
    await db.flush()
    logger.info("Subscription %s status set to %s", subscription_id, new_status)
    return subscription


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

async def list_plans(db: AsyncSession) -> list[Plan]:
    result = await db.execute(select(Plan).order_by(Plan.price, Plan.id))
    return list(result.scalars().all())


async def get_plan(db: AsyncSession, plan_id: int) -> Plan:
    plan = await db.get(Plan, plan_id)
    if plan is None:
        raise NotFoundError("Plan")
    return plan


async def create_plan(db: AsyncSession, **fields) -> Plan:
    plan = Plan(**fields)
    db.add(plan)
    await db.flush()
    logger.info("Plan %s (%s) created", plan.id, plan.name)
    return plan


async def update_plan(db: AsyncSession, plan_id: int, **changes) -> Plan:
    """
    Apply ``changes`` to a plan. Only keys that are present are written.

    Raises:
        NotFoundError: If the plan doesn't exist.
    """
    plan = await get_plan(db, plan_id)
    for field, value in changes.items():
        setattr(plan, field, value)
    await db.flush()
    logger.info("Plan %s updated: %s", plan_id, ", ".join(sorted(changes)) or "no changes")
    return plan


async def delete_plan(db: AsyncSession, plan_id: int) -> None:
    plan = await get_plan(db, plan_id)
    await db.delete(plan)
    await db.flush()
    logger.info("Plan %s deleted", plan_id)
