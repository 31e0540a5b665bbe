"""Pydantic schemas for comment endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from speedrun.db.patch import FieldChanges
from speedrun.validation import NonEmptyStr


class CommentCreate(BaseModel):
    record_id: int = Field(..., gt=0)
    user_id: int = Field(..., gt=0)
    text: NonEmptyStr


class CommentUpdate(FieldChanges):
    text: NonEmptyStr | None = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    record_id: int
    user_id: int
    text: str
    created_at: datetime
    updated_at: datetime
