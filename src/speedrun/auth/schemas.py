"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from speedrun.users.schemas import UserResponse


class LoginRequest(BaseModel):
    """Login with email or username + password."""

    identifier: str = Field(..., min_length=1, max_length=320, description="Email address or username")
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Token response returned after successful auth."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = 3600
    user: UserResponse
