"""
Withdrawal models — doctors cashing out their earnings.

  - WithdrawalRequest: a doctor asks for ``amount`` to be paid out by bank
    transfer or mobile money.
  - DoctorWallet: the doctor's running balance (one per doctor).
  - WalletTransaction: an entry in the wallet's history. Paying out a
    withdrawal writes a DEBIT entry.

Withdrawal statuses:

    pending ──approve──> approved ──mark-as-paid──> paid
       │                    │
       └──────reject────────┴──> rejected

The dashboard's quick action settles a request directly as COMPLETED or
FAILED regardless of where it is in that flow.
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, ForeignKey, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admin_dashboard.database import Base


class WithdrawalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(str, enum.Enum):
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"

    @classmethod
    def label(cls, value: str | None) -> str:
        """Human-readable name used in wallet history and emails."""
        labels = {
            cls.BANK_TRANSFER.value: "Bank Transfer",
            cls.MOBILE_MONEY.value: "Mobile Money",
        }
        return labels.get(value, "Mzunguko")


class WithdrawalRequest(Base):
    __tablename__ = "withdrawal_requests"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(
        String(30),
        default=PaymentMethod.BANK_TRANSFER.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=WithdrawalStatus.PENDING.value,
        nullable=False,
        index=True,
    )

    # Bank transfer details
    bank_name: Mapped[str | None] = mapped_column(String(255))
    bank_account: Mapped[str | None] = mapped_column(String(100))
    bank_branch: Mapped[str | None] = mapped_column(String(255))
    account_holder_name: Mapped[str | None] = mapped_column(String(255))

    # Mobile money details
    mobile_provider: Mapped[str | None] = mapped_column(String(100))
    mobile_number: Mapped[str | None] = mapped_column(String(50))

    rejection_reason: Mapped[str | None] = mapped_column(Text)
    payment_details: Mapped[dict | None] = mapped_column(JSON)

    # Reviewer bookkeeping (users.id of the admin user, when one exists)
    approved_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    paid_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    doctor: Mapped["User"] = relationship(foreign_keys=[doctor_id], lazy="selectin")


class DoctorWallet(Base):
    __tablename__ = "doctor_wallets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    balance: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # "credit" or "debit"
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="completed", nullable=False)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
