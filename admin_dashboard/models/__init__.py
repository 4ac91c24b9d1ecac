"""
SQLAlchemy ORM models package.

All models are imported here so that:
  1. Base.metadata knows every table before create_all() runs
  2. String relationship targets (e.g. "User") resolve
"""

from admin_dashboard.models.user import User, UserType, UserStatus  # noqa: F401
from admin_dashboard.models.appointment import Appointment, AppointmentStatus, AppointmentType  # noqa: F401
from admin_dashboard.models.payment import PaymentTransaction, PaymentStatus  # noqa: F401
from admin_dashboard.models.subscription import Plan, Subscription, SubscriptionStatus  # noqa: F401
from admin_dashboard.models.withdrawal import (  # noqa: F401
    WithdrawalRequest,
    WithdrawalStatus,
    PaymentMethod,
    DoctorWallet,
    WalletTransaction,
)
