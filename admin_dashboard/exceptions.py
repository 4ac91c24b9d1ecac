"""
Custom exception classes and FastAPI exception handlers.

The service layer raises domain-specific errors (InvalidStatusError,
NotFoundError, ...) without importing HTTP concepts. The handlers registered
here translate them into HTTP responses with one consistent body shape:

    {"message": "human readable text", ...optional extra fields}

Exception hierarchy:
    AdminAPIError (base)
    ├── UnauthorizedError        — missing/invalid bearer token (401)
    ├── InvalidCredentialsError  — login email/password mismatch (401)
    ├── BadRequestError          — invalid input (400)
    │   ├── InvalidStatusError   — status outside the resource's enum
    │   └── WithdrawalStateError — transition not allowed from current status
    ├── NotFoundError            — requested row doesn't exist (404)
    └── EmailDeliveryError       — an explicitly requested email failed (500)

Anything else is logged and reported as a generic 500 without internal
detail.
"""

import logging
from collections.abc import Iterable

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class AdminAPIError(Exception):
    """Base exception for all Admin API domain errors."""

    status_code = 500

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class UnauthorizedError(AdminAPIError):
    """Raised when a request lacks a valid bearer token."""

    status_code = 401

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail)


class InvalidCredentialsError(AdminAPIError):
    """Raised when login credentials match no admin account."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid credentials")


class BadRequestError(AdminAPIError):
    """Raised when the request is well-formed but its values are not acceptable."""

    status_code = 400


class InvalidStatusError(BadRequestError):
    """
    Raised when a status value is not in the resource's allow-list.

    Attributes:
        value: The rejected value (may be None when the field was omitted).
        allowed: The permitted values, reported back to the client.
    """

    def __init__(self, value: object, allowed: Iterable[str]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__("Invalid status")


class WithdrawalStateError(BadRequestError):
    """Raised when a withdrawal request cannot move to the requested state."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"This withdrawal request cannot be {action}")


class NotFoundError(AdminAPIError):
    """Raised when a requested resource does not exist."""

    status_code = 404

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class EmailDeliveryError(AdminAPIError):
    """Raised when an email the caller explicitly asked for could not be sent."""

    def __init__(self, detail: str = "Failed to send email"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(AdminAPIError)
    async def admin_api_error_handler(
        request: Request, exc: AdminAPIError
    ) -> JSONResponse:
        content = {"message": exc.detail}
        headers = None
        if isinstance(exc, InvalidStatusError):
            content["allowed"] = exc.allowed
        if isinstance(exc, UnauthorizedError):
            headers = {"WWW-Authenticate": "Bearer"}
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed bodies, bad path ids and out-of-range query params are
        # all reported as 400, like every other invalid input.
        return JSONResponse(
            status_code=400,
            content={
                "message": "Invalid request",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error"},
        )
