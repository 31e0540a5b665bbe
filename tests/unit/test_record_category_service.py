"""Record/category link tests."""

from __future__ import annotations

import pytest

from speedrun.errors import (
    ConflictError,
    CrossGameMismatchError,
    IncompatibleReferenceError,
    InvalidReferenceError,
    NotFoundError,
)
from speedrun.record_categories.schemas import RecordCategoryCreate, RecordCategoryUpdate
from speedrun.record_categories.service import RecordCategoryService
from speedrun.records.service import RecordService


class TestCreateLink:
    async def test_link_same_game(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        category = await factory.category(game, "Any%")

        link = await RecordCategoryService(db_session).create(
            RecordCategoryCreate(record_id=record.id, category_id=category.id)
        )

        assert link.record_id == record.id
        assert link.category_name == "Any%"
        assert (await RecordService(db_session).get_by_id(record.id)).categories == ["Any%"]

    async def test_cross_game_link_rejected(self, db_session, factory):
        g1 = await factory.game("Game One")
        g2 = await factory.game("Game Two")
        record = await factory.record(await factory.user(), await factory.version(g1))
        foreign = await factory.category(g2, "Any%")

        with pytest.raises(CrossGameMismatchError, match="different games") as exc_info:
            await RecordCategoryService(db_session).create(
                RecordCategoryCreate(record_id=record.id, category_id=foreign.id)
            )
        assert isinstance(exc_info.value, IncompatibleReferenceError)
        assert await RecordCategoryService(db_session).list_all() == []

    async def test_duplicate_link_conflicts(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        category = await factory.category(game)
        await factory.link(record, category)

        with pytest.raises(ConflictError):
            await RecordCategoryService(db_session).create(
                RecordCategoryCreate(record_id=record.id, category_id=category.id)
            )

    async def test_missing_record_or_category(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        category = await factory.category(game)
        service = RecordCategoryService(db_session)

        with pytest.raises(InvalidReferenceError, match="Record id is invalid"):
            await service.create(RecordCategoryCreate(record_id=999, category_id=category.id))
        with pytest.raises(InvalidReferenceError, match="Category id is invalid"):
            await service.create(RecordCategoryCreate(record_id=record.id, category_id=999))


class TestUpdateLink:
    async def test_move_to_other_category(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        link = await factory.link(record, await factory.category(game, "Any%"))
        stars = await factory.category(game, "120 Star")
        service = RecordCategoryService(db_session)

        assert await service.update(link.id, RecordCategoryUpdate(category_id=stars.id)) is True
        assert (await service.get_by_id(link.id)).category_name == "120 Star"

    async def test_cross_game_update_rejected(self, db_session, factory):
        g1 = await factory.game("Game One")
        g2 = await factory.game("Game Two")
        record = await factory.record(await factory.user(), await factory.version(g1))
        link = await factory.link(record, await factory.category(g1))
        foreign = await factory.category(g2)

        with pytest.raises(CrossGameMismatchError):
            await RecordCategoryService(db_session).update(link.id, RecordCategoryUpdate(category_id=foreign.id))

    async def test_unknown_link(self, db_session, factory):
        category = await factory.category(await factory.game())
        with pytest.raises(NotFoundError, match="Record category not found"):
            await RecordCategoryService(db_session).update(404, RecordCategoryUpdate(category_id=category.id))


class TestQueries:
    async def test_list_by_record(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        bare = await factory.record(await factory.user(), await factory.version(game, "v2"))
        await factory.link(record, await factory.category(game, "Any%"))
        await factory.link(record, await factory.category(game, "16 Star"))
        service = RecordCategoryService(db_session)

        assert [link.category_name for link in await service.list_by_record(record.id)] == ["16 Star", "Any%"]
        assert await service.list_by_record(bare.id) == []
        with pytest.raises(NotFoundError):
            await service.list_by_record(999)

    async def test_delete(self, db_session, factory):
        game = await factory.game()
        record = await factory.record(await factory.user(), await factory.version(game))
        link = await factory.link(record, await factory.category(game))
        service = RecordCategoryService(db_session)

        assert await service.delete(link.id) is True
        assert await service.delete(link.id) is False
        with pytest.raises(NotFoundError):
            await service.get_by_id(link.id)
