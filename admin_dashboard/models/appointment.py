"""
Appointment model — a booked consultation between a patient and a doctor.

Both parties reference the users table, so the relationships name their
foreign keys explicitly. They load with "selectin" because async sessions
cannot lazy-load on attribute access.
"""

import enum
from datetime import date, datetime, timezone

from sqlalchemy import String, Integer, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admin_dashboard.database import Base


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentType(str, enum.Enum):
    TEXT = "text"
    VOICE = "voice"
    VIDEO = "video"
    CALL = "call"


class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    doctor_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    patient_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    appointment_type: Mapped[str] = mapped_column(
        String(20),
        default=AppointmentType.TEXT.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=AppointmentStatus.PENDING.value,
        nullable=False,
    )

    appointment_date: Mapped[date | None] = mapped_column(Date)
    appointment_time: Mapped[str | None] = mapped_column(String(10))
    duration_minutes: Mapped[int | None] = mapped_column(Integer)
    reason: Mapped[str | None] = mapped_column(Text)

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

    # --- Relationships ---
    doctor: Mapped["User"] = relationship(foreign_keys=[doctor_id], lazy="selectin")
    patient: Mapped["User"] = relationship(foreign_keys=[patient_id], lazy="selectin")
