"""
Authentication service — admin login and account lookup.

The admin accounts are a static list loaded from configuration
(settings.ADMIN_ACCOUNTS); there is no database table behind them.

Login flow:
  1. Find the configured account with exactly this email
  2. Verify the password against its Argon2 hash
  3. Return a JWT token whose "sub" claim is the admin id

Security notes:
  - Login returns the same error for "wrong password" and "email not found"
    to prevent account enumeration
  - Failed attempts are logged with the email only, never the password
"""

import logging

from admin_dashboard.config import AdminAccount, settings
from admin_dashboard.exceptions import InvalidCredentialsError
from admin_dashboard.security import create_access_token, verify_password

logger = logging.getLogger(__name__)


def list_admins() -> list[AdminAccount]:
    return list(settings.ADMIN_ACCOUNTS)


def get_admin(admin_id: str) -> AdminAccount | None:
    """Return the configured admin with this id, or None."""
    for admin in settings.ADMIN_ACCOUNTS:
        if admin.id == admin_id:
            return admin
    return None


def find_admin_by_email(email: str) -> AdminAccount | None:
    for admin in settings.ADMIN_ACCOUNTS:
        if admin.email == email:
            return admin
    return None


def login(email: str, password: str) -> tuple[AdminAccount, str]:
    """
    Authenticate an admin and return a JWT token.

    Args:
        email: Admin email, compared exactly.
        password: Plaintext password to verify.

    Returns:
        Tuple of (AdminAccount, JWT token string).

    Raises:
        InvalidCredentialsError: If no account matches the email/password pair.
    """
    admin = find_admin_by_email(email)

    if admin is None or not verify_password(password, admin.password_hash):
        logger.warning("Failed admin login for %s", email)
        raise InvalidCredentialsError()

    token = create_access_token(
        data={"sub": admin.id, "email": admin.email, "role": admin.role}
    )
    logger.info("Admin %s logged in", admin.id)
    return admin, token
