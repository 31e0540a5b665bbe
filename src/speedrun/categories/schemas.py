"""Pydantic schemas for category endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from speedrun.db.patch import FieldChanges


class CategoryCreate(BaseModel):
    game_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=128)
    description: str | None = None


class CategoryUpdate(FieldChanges):
    name: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: int
    name: str
    description: str | None = None
