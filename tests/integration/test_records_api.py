"""Record submission, moderation and leaderboard endpoints."""

from datetime import time
from pathlib import Path

import pytest_asyncio
from httpx import AsyncClient

from speedrun.db.models import RecordStatus


@pytest_asyncio.fixture
async def catalogue(factory) -> dict:
    user = await factory.user("kaizo")
    game = await factory.game("Super Mario 64")
    version = await factory.version(game, "N64 JP")
    return {"user": user, "game": game, "version": version}


def _form(catalogue: dict, **overrides) -> dict:
    form = {
        "user_id": str(catalogue["user"].id),
        "game_id": str(catalogue["game"].id),
        "version_id": str(catalogue["version"].id),
        "record_time": "0:16:30",
        "video_url": "https://youtu.be/pb",
    }
    form.update(overrides)
    return form


class TestSubmit:
    async def test_create_and_get(self, client: AsyncClient, catalogue: dict):
        response = await client.post("/api/v1/records", data=_form(catalogue, notes="No BLJ"))
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Pending"
        assert data["record_time"] == "00:16:30"
        assert data["username"] == "kaizo"
        assert data["game_name"] == "Super Mario 64"
        assert data["version_name"] == "N64 JP"
        assert data["categories"] == []

        fetched = await client.get(f"/api/v1/records/{data['id']}")
        assert fetched.json() == data

    async def test_status_cannot_be_chosen_on_create(self, client: AsyncClient, catalogue: dict):
        response = await client.post("/api/v1/records", data=_form(catalogue, status="Approved"))
        assert response.json()["status"] == "Pending"

    async def test_proof_upload_becomes_video_url(self, client: AsyncClient, catalogue: dict):
        response = await client.post(
            "/api/v1/records",
            data=_form(catalogue, video_url=""),
            files={"proof": ("pb.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        )
        assert response.status_code == 201
        assert response.json()["video_url"].endswith(".mp4")

    async def test_proof_must_be_media(self, client: AsyncClient, catalogue: dict):
        response = await client.post(
            "/api/v1/records",
            data=_form(catalogue),
            files={"proof": ("pb.exe", b"MZ", "application/octet-stream")},
        )
        assert response.status_code == 400
        assert (await client.get("/api/v1/records")).json() == []

    async def test_rejected_submission_keeps_no_proof_file(self, client: AsyncClient, catalogue: dict, settings):
        upload_dir = Path(settings.upload_dir)
        before = set(upload_dir.iterdir())

        response = await client.post(
            "/api/v1/records",
            data=_form(catalogue, user_id="999", video_url=""),
            files={"proof": ("pb.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "User id is invalid"}
        assert set(upload_dir.iterdir()) == before

    async def test_bad_time_format(self, client: AsyncClient, catalogue: dict):
        response = await client.post("/api/v1/records", data=_form(catalogue, record_time="16 minutes"))
        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["field"] == "record_time"
        assert error["message"] == "Record time must be of format HH:MM:SS"

    async def test_incompatible_version(self, client: AsyncClient, catalogue: dict, factory):
        other_game = await factory.game("Other")
        other_version = await factory.version(other_game, "N64 JP")
        response = await client.post("/api/v1/records", data=_form(catalogue, version_id=str(other_version.id)))
        assert response.status_code == 400
        assert response.json() == {"message": "Game ID and version ID are not compatible"}
        assert (await client.get("/api/v1/records")).json() == []

    async def test_unknown_user(self, client: AsyncClient, catalogue: dict):
        response = await client.post("/api/v1/records", data=_form(catalogue, user_id="999"))
        assert response.status_code == 400
        assert response.json() == {"message": "User id is invalid"}


class TestUpdateAndModerate:
    async def test_patch_and_empty_patch(self, client: AsyncClient, factory, catalogue: dict):
        record = await factory.record(catalogue["user"], catalogue["version"])

        response = await client.patch(f"/api/v1/records/{record.id}", json={"record_time": "0:15:59"})
        assert response.json() == {"message": "Record updated successfully"}
        assert (await client.get(f"/api/v1/records/{record.id}")).json()["record_time"] == "00:15:59"

        empty = await client.patch(f"/api/v1/records/{record.id}", json={})
        assert empty.status_code == 400

    async def test_patch_missing_record(self, client: AsyncClient):
        response = await client.patch("/api/v1/records/999", json={"notes": "x"})
        assert response.status_code == 404

    async def test_game_is_not_updatable(self, client: AsyncClient, factory, catalogue: dict):
        record = await factory.record(catalogue["user"], catalogue["version"])
        response = await client.patch(f"/api/v1/records/{record.id}", json={"game_id": 2})
        assert response.status_code == 400

    async def test_approve_and_reject(self, client: AsyncClient, factory, catalogue: dict):
        record = await factory.record(catalogue["user"], catalogue["version"])

        approved = await client.post(f"/api/v1/records/{record.id}/approve")
        assert approved.json() == {"message": "Record approved successfully"}
        assert (await client.get(f"/api/v1/records/{record.id}")).json()["status"] == "Approved"

        rejected = await client.post(f"/api/v1/records/{record.id}/reject")
        assert rejected.json() == {"message": "Record rejected successfully"}
        assert (await client.get(f"/api/v1/records/{record.id}")).json()["status"] == "Rejected"

    async def test_approve_missing(self, client: AsyncClient):
        response = await client.post("/api/v1/records/999/approve")
        assert response.status_code == 404
        assert response.json() == {"message": "Record approval failed"}

    async def test_delete(self, client: AsyncClient, factory, catalogue: dict):
        record = await factory.record(catalogue["user"], catalogue["version"])
        assert (await client.delete(f"/api/v1/records/{record.id}")).json() == {
            "message": "Record deleted successfully"
        }
        assert (await client.get(f"/api/v1/records/{record.id}")).status_code == 404


class TestLeaderboard:
    async def test_ranked_with_filters(self, client: AsyncClient, factory, catalogue: dict):
        game, version, user = catalogue["game"], catalogue["version"], catalogue["user"]
        any_pct = await factory.category(game, "Any%")
        rival = await factory.user("rival")
        slow = await factory.record(user, version, time(0, 20, 0), status=RecordStatus.APPROVED)
        fast = await factory.record(rival, version, time(0, 16, 30))
        await factory.link(slow, any_pct)

        board = await client.get(f"/api/v1/records/games/{game.id}/leaderboard")
        assert [(e["rank"], e["id"]) for e in board.json()] == [(1, fast.id), (2, slow.id)]

        by_category = await client.get(
            f"/api/v1/records/games/{game.id}/leaderboard", params={"category_id": any_pct.id}
        )
        assert [e["id"] for e in by_category.json()] == [slow.id]
        assert by_category.json()[0]["categories"] == ["Any%"]

        approved = await client.get(
            f"/api/v1/records/games/{game.id}/leaderboard", params={"status": "Approved"}
        )
        assert [e["id"] for e in approved.json()] == [slow.id]

    async def test_empty_leaderboard_is_404(self, client: AsyncClient, catalogue: dict):
        response = await client.get(f"/api/v1/records/games/{catalogue['game'].id}/leaderboard")
        assert response.status_code == 404
        assert response.json() == {"message": "No records found"}

    async def test_bad_status_filter(self, client: AsyncClient, catalogue: dict):
        response = await client.get(
            f"/api/v1/records/games/{catalogue['game'].id}/leaderboard", params={"status": "Verified"}
        )
        assert response.status_code == 400
