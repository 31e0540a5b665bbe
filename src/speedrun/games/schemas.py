"""Pydantic schemas for game endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from speedrun.db.patch import FieldChanges
from speedrun.validation import NonEmptyStr, ReleaseDate, UrlStr


class GameCreate(BaseModel):
    name: NonEmptyStr
    rules: NonEmptyStr
    release_date: ReleaseDate | None = None
    developer: str | None = Field(None, max_length=255)
    icon_url: UrlStr | None = None


class GameUpdate(FieldChanges):
    name: NonEmptyStr | None = None
    rules: NonEmptyStr | None = None
    release_date: ReleaseDate | None = None
    developer: str | None = Field(None, max_length=255)
    icon_url: UrlStr | None = None


class GameResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    icon_url: str | None = None
    release_date: date | None = None
    rules: str
    developer: str | None = None
