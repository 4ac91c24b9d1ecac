"""
PaymentTransaction model — a single charge recorded by a payment gateway.

The table column is named ``status`` (as written by the gateway webhooks in
the main backend); it is mapped to the ``payment_status`` attribute so the
API exposes it under the name the dashboard uses.

Amounts are stored as NUMERIC(12, 2) in the transaction's own currency.
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admin_dashboard.database import Base


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="MWK", nullable=False)

    payment_status: Mapped[str] = mapped_column(
        "status",
        String(20),
        default=PaymentStatus.PENDING.value,
        nullable=False,
    )

    payment_method: Mapped[str | None] = mapped_column(String(50))
    gateway: Mapped[str | None] = mapped_column(String(50))

    # Gateway-side identifier (e.g., PayChangu tx_ref)
    transaction_id: Mapped[str | None] = mapped_column(String(255), index=True)
    reference: Mapped[str | None] = mapped_column(String(255))

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

    user: Mapped["User"] = relationship(lazy="selectin")
