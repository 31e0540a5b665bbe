"""Comments on records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import delete, select

from speedrun.db.models import Comment, Record, User
from speedrun.db.patch import apply_update
from speedrun.errors import EmptyUpdateError, InvalidReferenceError, NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from speedrun.comments.schemas import CommentCreate, CommentUpdate

logger = structlog.get_logger()


class CommentService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[Comment]:
        result = await self.db.execute(select(Comment).order_by(Comment.id))
        return list(result.scalars().all())

    async def get_by_id(self, comment_id: int) -> Comment:
        result = await self.db.execute(
            select(Comment).where(Comment.id == comment_id).execution_options(populate_existing=True)
        )
        comment = result.scalar_one_or_none()
        if comment is None:
            msg = "Comment not found"
            raise NotFoundError(msg)
        return comment

    async def list_by_record(self, record_id: int) -> list[Comment]:
        record = await self.db.execute(select(Record.id).where(Record.id == record_id))
        if record.first() is None:
            msg = "Record not found"
            raise NotFoundError(msg)
        result = await self.db.execute(
            select(Comment).where(Comment.record_id == record_id).order_by(Comment.created_at, Comment.id)
        )
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> list[Comment]:
        user = await self.db.execute(select(User.id).where(User.id == user_id))
        if user.first() is None:
            msg = "User not found"
            raise NotFoundError(msg)
        result = await self.db.execute(
            select(Comment).where(Comment.user_id == user_id).order_by(Comment.created_at, Comment.id)
        )
        return list(result.scalars().all())

    async def create(self, body: CommentCreate) -> Comment:
        """
        Post a comment on a record.

        Raises:
            InvalidReferenceError: If the record or user does not exist.
        """
        record = await self.db.execute(select(Record.id).where(Record.id == body.record_id).with_for_update())
        if record.first() is None:
            msg = "Record id is invalid"
            raise InvalidReferenceError(msg)

        user = await self.db.execute(select(User.id).where(User.id == body.user_id).with_for_update())
        if user.first() is None:
            msg = "User id is invalid"
            raise InvalidReferenceError(msg)

        now = datetime.now(timezone.utc)
        comment = Comment(
            record_id=body.record_id,
            user_id=body.user_id,
            text=body.text,
            created_at=now,
            updated_at=now,
        )
        self.db.add(comment)
        await self.db.flush()
        await self.db.commit()

        logger.info("comment_created", comment_id=comment.id, record_id=comment.record_id)
        return comment

    async def update(self, comment_id: int, body: CommentUpdate) -> bool:
        changes = body.changes()
        if not changes:
            raise EmptyUpdateError
        changes["updated_at"] = datetime.now(timezone.utc)
        updated = await apply_update(self.db, Comment, comment_id, changes)
        await self.db.commit()
        return updated

    async def delete(self, comment_id: int) -> bool:
        result = await self.db.execute(delete(Comment).where(Comment.id == comment_id))
        await self.db.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]
