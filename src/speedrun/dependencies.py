"""Shared FastAPI dependencies: one service instance per request session."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from speedrun.auth.service import AuthService
from speedrun.categories.service import CategoryService
from speedrun.comments.service import CommentService
from speedrun.config import Settings, get_settings
from speedrun.database import get_session
from speedrun.games.service import GameService
from speedrun.record_categories.service import RecordCategoryService
from speedrun.records.service import RecordService
from speedrun.users.service import UserService
from speedrun.versions.service import GameVersionService


def settings_dep() -> Settings:
    return get_settings()


def get_user_service(db: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(db)


def get_auth_service(db: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(db)


def get_game_service(db: AsyncSession = Depends(get_session)) -> GameService:
    return GameService(db)


def get_version_service(db: AsyncSession = Depends(get_session)) -> GameVersionService:
    return GameVersionService(db)


def get_category_service(db: AsyncSession = Depends(get_session)) -> CategoryService:
    return CategoryService(db)


def get_record_service(db: AsyncSession = Depends(get_session)) -> RecordService:
    return RecordService(db)


def get_record_category_service(db: AsyncSession = Depends(get_session)) -> RecordCategoryService:
    return RecordCategoryService(db)


def get_comment_service(db: AsyncSession = Depends(get_session)) -> CommentService:
    return CommentService(db)
