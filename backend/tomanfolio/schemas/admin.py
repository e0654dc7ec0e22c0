"""Schemas for admin endpoints."""

from datetime import datetime

from pydantic import BaseModel


class AdminUserResponse(BaseModel):
    """User account as listed for administrators."""

    id: str
    username: str
    display_name: str | None = None
    is_admin: bool
    created_at: datetime | None = None
    transaction_count: int = 0
