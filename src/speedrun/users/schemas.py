"""Request/response schemas for user endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from speedrun.db.patch import FieldChanges
from speedrun.validation import Password, UrlStr


class UserCreate(BaseModel):
    """Create a user account."""

    username: str = Field(..., min_length=1, max_length=64)
    email: EmailStr
    password: Password
    profile_picture_url: UrlStr | None = None
    bio: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class UserUpdate(FieldChanges):
    """Partial profile update. Only supplied fields change."""

    username: str | None = Field(None, min_length=1, max_length=64)
    email: EmailStr | None = None
    password: Password | None = None
    profile_picture_url: UrlStr | None = None
    bio: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower().strip() if v else v


class UserResponse(BaseModel):
    """Public user profile. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    profile_picture_url: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime
