"""Pydantic schemas for record and leaderboard endpoints."""

from __future__ import annotations

from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, Field

from speedrun.db.models import RecordStatus
from speedrun.db.patch import FieldChanges
from speedrun.validation import RecordTime, UrlStr


class RecordCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    game_id: int = Field(..., gt=0)
    version_id: int = Field(..., gt=0)
    record_time: RecordTime
    video_url: UrlStr | None = None
    notes: str | None = None


class RecordUpdate(FieldChanges):
    """Updatable record fields. ``user_id`` and ``game_id`` are fixed at creation."""

    model_config = ConfigDict(use_enum_values=True)

    version_id: int | None = Field(None, gt=0)
    record_time: RecordTime | None = None
    video_url: UrlStr | None = None
    status: RecordStatus | None = None
    notes: str | None = None


class RecordResponse(BaseModel):
    """A record joined with its user, game, version and category names."""

    id: int
    user_id: int
    username: str
    game_id: int
    game_name: str
    version_id: int
    version_name: str
    record_time: time
    video_url: str | None = None
    status: RecordStatus
    notes: str | None = None
    created_at: datetime
    categories: list[str] = []


class LeaderboardEntry(RecordResponse):
    rank: int
