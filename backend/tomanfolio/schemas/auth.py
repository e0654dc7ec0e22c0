"""Schemas for authentication endpoints."""

from pydantic import BaseModel, Field

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class UserRegister(BaseModel):
    """Schema for user registration."""

    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(min_length=6, max_length=100)
    display_name: str | None = Field(None, max_length=100)


class UserLogin(BaseModel):
    """Schema for user login."""

    username: str
    password: str


class UserInfo(BaseModel):
    """Schema for user info in auth responses."""

    id: str
    username: str
    display_name: str | None = None
    is_admin: bool = False

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Schema for login/register response."""

    access_token: str
    token_type: str = "bearer"
    user: UserInfo
