"""Pydantic schemas for record/category link endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from speedrun.db.patch import FieldChanges


class RecordCategoryCreate(BaseModel):
    record_id: int = Field(..., gt=0)
    category_id: int = Field(..., gt=0)


class RecordCategoryUpdate(FieldChanges):
    category_id: int | None = Field(None, gt=0)


class RecordCategoryResponse(BaseModel):
    id: int
    record_id: int
    category_id: int
    category_name: str
