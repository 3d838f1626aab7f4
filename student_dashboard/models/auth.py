"""
Auth request/response schemas.

Dependencies: pydantic
System role: Sign-in, registration and sign-out API contracts
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for password sign-in."""

    email: str = Field(..., min_length=3, description="Account email")
    password: str = Field(..., min_length=1, description="Account password")


class RegisterRequest(BaseModel):
    """Request schema for account registration."""

    email: str = Field(..., min_length=3, description="Account email")
    password: str = Field(..., min_length=6, description="Account password")
    full_name: str | None = Field(None, description="Display name stored as profile metadata")


class UserResponse(BaseModel):
    """Signed-in user as returned by the API."""

    id: str
    email: str | None = None
    full_name: str | None = None


class SessionResponse(BaseModel):
    """Session issued on sign-in."""

    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "bearer"
    user: UserResponse
    redirect_to: str


class RegisterResponse(BaseModel):
    """Registration outcome; the account must be confirmed by email."""

    user: UserResponse | None
    message: str
    email_redirect_to: str
