"""
Payment service — browsing gateway transactions and correcting their status.

Admins use the status override to reconcile payments the gateway webhook
never confirmed (pending -> completed/failed) and to record refunds.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.exceptions import NotFoundError
from admin_dashboard.models.payment import PaymentTransaction, PaymentStatus
from admin_dashboard.services.status import parse_status

logger = logging.getLogger(__name__)


async def list_payments(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    gateway: str | None = None,
) -> tuple[list[PaymentTransaction], int]:
    """List payment transactions, newest first, with optional status/gateway filters."""
    filters = []
    if status and status != "all":
        filters.append(PaymentTransaction.payment_status == status)
    if gateway and gateway != "all":
        filters.append(PaymentTransaction.gateway == gateway)

    total = await db.scalar(
        select(func.count()).select_from(PaymentTransaction).where(*filters)
    )
    result = await db.execute(
        select(PaymentTransaction)
        .where(*filters)
        .order_by(PaymentTransaction.created_at.desc(), PaymentTransaction.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total or 0


async def update_payment_status(
    db: AsyncSession,
    payment_id: int,
    status: str | None,
) -> PaymentTransaction:
    """
    Set a payment transaction's status.

    Raises:
        InvalidStatusError: If status is not a PaymentStatus value.
        NotFoundError: If the transaction doesn't exist.
    """
    new_status = parse_status(status, PaymentStatus)

    payment = await db.get(PaymentTransaction, payment_id)
    if payment is None:
        raise NotFoundError("Payment")

    payment.payment_status = new_status
    await db.flush()
    logger.info("Payment %s status set to %s", payment_id, new_status)
    return payment
