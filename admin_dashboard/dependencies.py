"""
FastAPI dependencies for authentication.

Every dashboard endpoint except login declares ``get_current_admin`` as a
dependency. FastAPI calls it before the route handler runs; if the bearer
token is missing, fails signature/expiry verification, or names an admin
that is no longer configured, the request is rejected with 401 and the
handler never executes.

There is a single role: a configured admin account. There is no per-resource
authorization beyond that.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from admin_dashboard.config import AdminAccount
from admin_dashboard.exceptions import UnauthorizedError
from admin_dashboard.security import decode_access_token
from admin_dashboard.services import auth_service


# auto_error=False so a missing header reaches get_current_admin and is
# reported with the same 401 body as a bad token.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminAccount:
    """
    Validate the bearer token and return the corresponding admin account.

    Raises:
        UnauthorizedError: If the token is missing, invalid, expired, or
            its subject is not a configured admin.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError()

    admin_id = payload.get("sub")
    if admin_id is None:
        raise UnauthorizedError()

    admin = auth_service.get_admin(admin_id)
    if admin is None:
        raise UnauthorizedError()

    return admin
