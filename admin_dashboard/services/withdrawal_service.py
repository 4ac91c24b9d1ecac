"""
Withdrawal service — reviewing and settling doctors' payout requests.

Two entry points change a request's status:

1. Dashboard quick action (``update_withdrawal_status``)
   Settles a request as COMPLETED or FAILED in one step. Completing it
   requires the configured admin id of the operator who paid it out
   (``completed_by``), debits the doctor's wallet and emails the doctor.

2. Review flow (``approve`` / ``reject`` / ``mark_as_paid``)
   pending -> approved -> paid, with pending|approved -> rejected. Marking
   as paid refuses to overdraw the wallet.

Wallet bookkeeping:
  A doctor has at most one DoctorWallet, created on first use with a zero
  balance. Every payout writes a DEBIT WalletTransaction. All of this runs
  inside the request's session, so it commits or rolls back as a unit.

Admin attribution:
  ``approved_by`` / ``paid_by`` reference users.id. Admin accounts are
  configured, not stored, so the id is resolved through the admin-typed
  user sharing the admin's email; when there is none the column stays NULL.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from admin_dashboard.config import AdminAccount
from admin_dashboard.exceptions import BadRequestError, NotFoundError, WithdrawalStateError
from admin_dashboard.models.user import User, UserType
from admin_dashboard.models.withdrawal import (
    DoctorWallet,
    PaymentMethod,
    WalletTransaction,
    WithdrawalRequest,
    WithdrawalStatus,
)
from admin_dashboard.services import auth_service, email_service
from admin_dashboard.services.status import parse_status

logger = logging.getLogger(__name__)

# The dashboard quick action only settles requests
QUICK_ACTION_STATUSES = (WithdrawalStatus.COMPLETED.value, WithdrawalStatus.FAILED.value)

# Statuses in which the money has already left the wallet
SETTLED_STATUSES = (WithdrawalStatus.COMPLETED.value, WithdrawalStatus.PAID.value)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

async def list_withdrawals(
    db: AsyncSession,
    page: int = 1,
    limit: int = 20,
    status: str | None = None,
    doctor_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> tuple[list[WithdrawalRequest], int]:
    """
    List withdrawal requests, newest first.

    ``date_from`` and ``date_to`` are inclusive calendar days (UTC).
    """
    filters = []
    if status and status != "all":
        filters.append(WithdrawalRequest.status == status)
    if doctor_id is not None:
        filters.append(WithdrawalRequest.doctor_id == doctor_id)
    if date_from is not None:
        start = datetime.combine(date_from, time.min, tzinfo=timezone.utc)
        filters.append(WithdrawalRequest.created_at >= start)
    if date_to is not None:
        end = datetime.combine(date_to + timedelta(days=1), time.min, tzinfo=timezone.utc)
        filters.append(WithdrawalRequest.created_at < end)

    total = await db.scalar(
        select(func.count()).select_from(WithdrawalRequest).where(*filters)
    )
    result = await db.execute(
        select(WithdrawalRequest)
        .where(*filters)
        .order_by(WithdrawalRequest.created_at.desc(), WithdrawalRequest.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total or 0


async def get_withdrawal(db: AsyncSession, withdrawal_id: int) -> WithdrawalRequest:
    withdrawal = await db.get(WithdrawalRequest, withdrawal_id)
    if withdrawal is None:
        raise NotFoundError("Withdrawal request")
    return withdrawal


async def get_stats(db: AsyncSession) -> dict:
    """Counts and amounts per status, computed in one aggregate query."""

    def count_of(status: WithdrawalStatus):
        return func.count(case((WithdrawalRequest.status == status.value, 1)))

    def sum_of(status: WithdrawalStatus | None = None):
        if status is None:
            return func.coalesce(func.sum(WithdrawalRequest.amount), 0)
        return func.coalesce(
            func.sum(case((WithdrawalRequest.status == status.value, WithdrawalRequest.amount), else_=0)),
            0,
        )

    row = (await db.execute(
        select(
            func.count(),
            count_of(WithdrawalStatus.PENDING),
            count_of(WithdrawalStatus.APPROVED),
            count_of(WithdrawalStatus.REJECTED),
            count_of(WithdrawalStatus.PAID),
            sum_of(),
            sum_of(WithdrawalStatus.PAID),
            sum_of(WithdrawalStatus.PENDING),
        ).select_from(WithdrawalRequest)
    )).one()

    return {
        "total_requests": row[0],
        "pending_requests": row[1],
        "approved_requests": row[2],
        "rejected_requests": row[3],
        "paid_requests": row[4],
        "total_amount_requested": float(row[5]),
        "total_amount_paid": float(row[6]),
        "total_amount_pending": float(row[7]),
    }


async def resolve_admin_user_id(db: AsyncSession, admin: AdminAccount) -> int | None:
    """users.id of the admin-typed user with the admin's email, if any."""
    return await db.scalar(
        select(User.id).where(
            User.email == admin.email,
            User.user_type == UserType.ADMIN.value,
        )
    )


# ---------------------------------------------------------------------------
# Wallet helpers
# ---------------------------------------------------------------------------

async def get_or_create_wallet(db: AsyncSession, doctor_id: int) -> DoctorWallet:
    wallet = await db.scalar(
        select(DoctorWallet).where(DoctorWallet.doctor_id == doctor_id)
    )
    if wallet is None:
        wallet = DoctorWallet(doctor_id=doctor_id, balance=Decimal("0"))
        db.add(wallet)
        await db.flush()
        logger.info("Created wallet for doctor %s", doctor_id)
    return wallet


async def debit_wallet(
    db: AsyncSession,
    wallet: DoctorWallet,
    amount: Decimal,
    description: str,
    metadata: dict | None = None,
) -> WalletTransaction:
    """Subtract ``amount`` from the wallet and record the debit."""
    wallet.balance = Decimal(wallet.balance) - Decimal(amount)
    transaction = WalletTransaction(
        doctor_id=wallet.doctor_id,
        type="debit",
        amount=amount,
        description=description,
        status="completed",
        metadata_=metadata,
    )
    db.add(transaction)
    await db.flush()
    return transaction


# ---------------------------------------------------------------------------
# Dashboard quick action
# ---------------------------------------------------------------------------

async def update_withdrawal_status(
    db: AsyncSession,
    withdrawal_id: int,
    status: str | None,
    completed_by: str | None = None,
) -> WithdrawalRequest:
    """
    Settle a withdrawal request as COMPLETED or FAILED.

    Args:
        db: Database session.
        withdrawal_id: The request to settle.
        status: "completed" or "failed".
        completed_by: Configured admin id; required for "completed".

    Returns:
        The updated WithdrawalRequest.

    Raises:
        InvalidStatusError: If status is not "completed" or "failed".
        BadRequestError: If completed_by is missing or unknown.
        NotFoundError: If the request doesn't exist.
        WithdrawalStateError: If a completed or paid request is set to failed.
    """
    new_status = parse_status(status, QUICK_ACTION_STATUSES)

    if new_status == WithdrawalStatus.COMPLETED.value and not completed_by:
        raise BadRequestError("completed_by is required for completed status")

    paid_by = None
    if completed_by:
        admin = auth_service.get_admin(completed_by)
        if admin is None:
            raise BadRequestError("Invalid admin ID provided")
        paid_by = await resolve_admin_user_id(db, admin)
        if paid_by is None:
            logger.info("No admin user row for %s; paid_by left empty", admin.email)

    withdrawal = await get_withdrawal(db, withdrawal_id)
    already_settled = withdrawal.status in SETTLED_STATUSES
    if already_settled and new_status == WithdrawalStatus.FAILED.value:
        # Money has already left the wallet
        raise WithdrawalStateError("failed")

    withdrawal.status = new_status
    if new_status == WithdrawalStatus.COMPLETED.value:
        withdrawal.paid_by = paid_by
        withdrawal.paid_at = datetime.now(timezone.utc)
    await db.flush()
    logger.info("Withdrawal request %s marked %s", withdrawal_id, new_status)

    if new_status != WithdrawalStatus.COMPLETED.value:
        return withdrawal

    if already_settled:
        # The wallet was debited when the request was first settled
        logger.warning("Withdrawal request %s was already settled; wallet untouched", withdrawal_id)
        return withdrawal

    wallet = await get_or_create_wallet(db, withdrawal.doctor_id)
    await debit_wallet(
        db,
        wallet,
        withdrawal.amount,
        f"Withdrawal processed - {PaymentMethod.label(withdrawal.payment_method)}",
        metadata={"withdrawal_request_id": withdrawal.id},
    )

    doctor = withdrawal.doctor
    if doctor is not None:
        await email_service.send_withdrawal_completed_email(
            doctor_email=doctor.email,
            doctor_name=doctor.name,
            amount=float(withdrawal.amount),
            payment_method=withdrawal.payment_method,
            bank_name=withdrawal.bank_name,
            account_holder_name=withdrawal.account_holder_name,
            completed_at=withdrawal.paid_at,
        )

    return withdrawal


# ---------------------------------------------------------------------------
# Review flow
# ---------------------------------------------------------------------------

async def approve(
    db: AsyncSession,
    withdrawal_id: int,
    admin: AdminAccount,
) -> WithdrawalRequest:
    """
    Approve a PENDING request.

    Raises:
        NotFoundError: If the request doesn't exist.
        WithdrawalStateError: If the request is not pending.
    """
    withdrawal = await get_withdrawal(db, withdrawal_id)
    if withdrawal.status != WithdrawalStatus.PENDING.value:
        raise WithdrawalStateError("approved")

    withdrawal.status = WithdrawalStatus.APPROVED.value
    withdrawal.approved_by = await resolve_admin_user_id(db, admin)
    withdrawal.approved_at = datetime.now(timezone.utc)
    await db.flush()
    logger.info("Withdrawal request %s approved by %s", withdrawal_id, admin.id)
    return withdrawal


async def reject(
    db: AsyncSession,
    withdrawal_id: int,
    admin: AdminAccount,
    rejection_reason: str,
) -> WithdrawalRequest:
    """
    Reject a PENDING or APPROVED request.

    Raises:
        NotFoundError: If the request doesn't exist.
        WithdrawalStateError: If the request was already paid, rejected or settled.
    """
    withdrawal = await get_withdrawal(db, withdrawal_id)
    if withdrawal.status not in (WithdrawalStatus.PENDING.value, WithdrawalStatus.APPROVED.value):
        raise WithdrawalStateError("rejected")

    withdrawal.status = WithdrawalStatus.REJECTED.value
    withdrawal.rejection_reason = rejection_reason
    await db.flush()
    logger.info("Withdrawal request %s rejected by %s", withdrawal_id, admin.id)
    return withdrawal


async def mark_as_paid(
    db: AsyncSession,
    withdrawal_id: int,
    admin: AdminAccount,
    payment_details: dict | None = None,
) -> tuple[WithdrawalRequest, WalletTransaction, Decimal]:
    """
    Pay out an APPROVED request from the doctor's wallet.

    Returns:
        Tuple of (updated request, wallet debit, new wallet balance).

    Raises:
        NotFoundError: If the request doesn't exist.
        WithdrawalStateError: If the request is not approved.
        BadRequestError: If the wallet balance doesn't cover the amount.
    """
    withdrawal = await get_withdrawal(db, withdrawal_id)
    if withdrawal.status != WithdrawalStatus.APPROVED.value:
        raise WithdrawalStateError("marked as paid")

    wallet = await get_or_create_wallet(db, withdrawal.doctor_id)
    if Decimal(wallet.balance) < Decimal(withdrawal.amount):
        raise BadRequestError("Insufficient balance in doctor's wallet")

    destination = withdrawal.bank_name or PaymentMethod.label(withdrawal.payment_method)
    payee = withdrawal.account_holder_name or withdrawal.mobile_number
    description = f"Withdrawal payment to {destination}"
    if payee:
        description += f" - {payee}"

    transaction = await debit_wallet(
        db,
        wallet,
        withdrawal.amount,
        description,
        metadata={
            "withdrawal_request_id": withdrawal.id,
            "bank_account": withdrawal.bank_account,
            "bank_name": withdrawal.bank_name,
            "account_holder_name": withdrawal.account_holder_name,
        },
    )

    withdrawal.status = WithdrawalStatus.PAID.value
    withdrawal.paid_by = await resolve_admin_user_id(db, admin)
    withdrawal.paid_at = datetime.now(timezone.utc)
    withdrawal.payment_details = payment_details
    await db.flush()
    logger.info("Withdrawal request %s paid by %s", withdrawal_id, admin.id)
    return withdrawal, transaction, Decimal(wallet.balance)
