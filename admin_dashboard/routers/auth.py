"""
Authentication router — admin login.

Login is the only public endpoint in the API. Everything else requires a
valid JWT in the Authorization header.

Endpoints:
  POST /api/auth/login  — Authenticate and get a token
  GET  /api/auth/me     — Return the admin the token belongs to

Passwords exist only in memory during request processing; they are never
logged, and no request-body logging middleware is installed.
"""

from fastapi import APIRouter, Depends

from admin_dashboard.config import AdminAccount
from admin_dashboard.dependencies import get_current_admin
from admin_dashboard.schemas.auth import LoginRequest, LoginResponse, CurrentAdminResponse
from admin_dashboard.services import auth_service

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Authenticate and get a token",
)
async def login(request: LoginRequest):
    """
    Authenticate with one of the configured admin accounts.

    Returns a JWT bearer token that must be included in the Authorization
    header for all subsequent requests:

        Authorization: Bearer <token>

    A non-matching email/password pair returns 401 "Invalid credentials".
    """
    admin, token = auth_service.login(email=request.email, password=request.password)
    return LoginResponse(token=token, user=admin.model_dump())


@router.get(
    "/me",
    response_model=CurrentAdminResponse,
    summary="Get the authenticated admin",
)
async def me(admin: AdminAccount = Depends(get_current_admin)):
    return CurrentAdminResponse(user=admin.model_dump())
