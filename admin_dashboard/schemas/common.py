"""
Schemas shared by several resources.

``StatusUpdateRequest.status`` is deliberately a plain optional string:
the allow-list check happens in the service layer so that an unknown value
yields 400 "Invalid status" (with the permitted values) rather than a
generic validation error.
"""

from pydantic import BaseModel


class StatusUpdateRequest(BaseModel):
    """Request body for PATCH /api/{resource}/{id}/status."""
    status: str | None = None


class MessageResponse(BaseModel):
    message: str


class PersonSummary(BaseModel):
    """The slice of a user embedded in appointment/payment/withdrawal rows."""
    id: int
    first_name: str
    last_name: str
    email: str

    model_config = {"from_attributes": True}


def total_pages(total_count: int, limit: int) -> int:
    """Number of pages needed to show ``total_count`` rows ``limit`` at a time."""
    return (total_count + limit - 1) // limit
