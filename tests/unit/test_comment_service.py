"""Comment service tests."""

from __future__ import annotations

import pytest

from speedrun.comments.schemas import CommentCreate, CommentUpdate
from speedrun.comments.service import CommentService
from speedrun.errors import EmptyUpdateError, InvalidReferenceError, NotFoundError


class TestCommentService:
    async def test_create(self, db_session, factory):
        user = await factory.user()
        record = await factory.record(user, await factory.version(await factory.game()))

        comment = await CommentService(db_session).create(
            CommentCreate(record_id=record.id, user_id=user.id, text="Clean run!")
        )
        assert comment.id > 0
        assert comment.text == "Clean run!"
        assert comment.created_at == comment.updated_at

    async def test_create_requires_record_and_user(self, db_session, factory):
        user = await factory.user()
        record = await factory.record(user, await factory.version(await factory.game()))
        service = CommentService(db_session)

        with pytest.raises(InvalidReferenceError, match="Record id is invalid"):
            await service.create(CommentCreate(record_id=999, user_id=user.id, text="hi"))
        with pytest.raises(InvalidReferenceError, match="User id is invalid"):
            await service.create(CommentCreate(record_id=record.id, user_id=999, text="hi"))

    async def test_update_refreshes_timestamp(self, db_session, factory):
        user = await factory.user()
        record = await factory.record(user, await factory.version(await factory.game()))
        comment = await factory.comment(record, user, "first")
        service = CommentService(db_session)

        assert await service.update(comment.id, CommentUpdate(text="edited")) is True
        fetched = await service.get_by_id(comment.id)
        assert fetched.text == "edited"
        assert fetched.updated_at > fetched.created_at

    async def test_empty_update_rejected(self, db_session, factory):
        user = await factory.user()
        record = await factory.record(user, await factory.version(await factory.game()))
        comment = await factory.comment(record, user)
        with pytest.raises(EmptyUpdateError):
            await CommentService(db_session).update(comment.id, CommentUpdate())

    async def test_list_by_record_and_user(self, db_session, factory):
        alice = await factory.user("alice")
        bob = await factory.user("bob")
        version = await factory.version(await factory.game())
        record = await factory.record(alice, version)
        quiet = await factory.record(alice, version)
        await factory.comment(record, alice, "mine")
        await factory.comment(record, bob, "nice")
        service = CommentService(db_session)

        assert [c.text for c in await service.list_by_record(record.id)] == ["mine", "nice"]
        assert await service.list_by_record(quiet.id) == []
        assert [c.text for c in await service.list_by_user(bob.id)] == ["nice"]

        with pytest.raises(NotFoundError, match="Record not found"):
            await service.list_by_record(999)
        with pytest.raises(NotFoundError, match="User not found"):
            await service.list_by_user(999)

    async def test_deleting_record_removes_comments(self, db_session, factory):
        user = await factory.user()
        record = await factory.record(user, await factory.version(await factory.game()))
        await factory.comment(record, user)
        await factory.comment(record, user)

        from speedrun.records.service import RecordService

        await RecordService(db_session).delete(record.id)
        assert await CommentService(db_session).list_all() == []
