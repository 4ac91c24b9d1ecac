"""
Pydantic schemas for the admin login flow.

Password hashes never appear in any response schema.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""
    email: str
    password: str


class AdminResponse(BaseModel):
    """Public representation of an admin account."""
    id: str
    email: str
    name: str
    role: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Response body for a successful login — contains the JWT."""
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: AdminResponse


class CurrentAdminResponse(BaseModel):
    user: AdminResponse


class AdminListResponse(BaseModel):
    admins: list[AdminResponse]
