"""
User model — patients, doctors and platform admins.

Users are created by the main DocAvailable backend; the dashboard reviews
them. The only field an operator changes is ``status``:

  - Doctors start as PENDING and are APPROVED or REJECTED after review.
  - Any user can be SUSPENDED or BANNED.

Both enums inherit from str so values serialize naturally to JSON and are
stored as plain strings.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from admin_dashboard.database import Base


class UserType(str, enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    """The values an admin may set through PATCH /api/users/{id}/status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    BANNED = "banned"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    user_type: Mapped[str] = mapped_column(
        String(20),
        default=UserType.PATIENT.value,
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        default=UserStatus.APPROVED.value,
        nullable=False,
    )

    # Doctor profile fields (null for patients)
    specialization: Mapped[str | None] = mapped_column(String(255))
    medical_licence: Mapped[str | None] = mapped_column(String(255))

    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))

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

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
