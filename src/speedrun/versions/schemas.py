"""Pydantic schemas for game version endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from speedrun.db.patch import FieldChanges


class GameVersionCreate(BaseModel):
    game_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=128)


class GameVersionUpdate(FieldChanges):
    name: str | None = Field(None, min_length=1, max_length=128)


class GameVersionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    game_id: int
    name: str
