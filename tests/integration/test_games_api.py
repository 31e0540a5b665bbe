"""Game, version and category endpoints."""

from httpx import AsyncClient


class TestGames:
    async def test_create_from_form(self, client: AsyncClient):
        response = await client.post("/api/v1/games", data={
            "name": "Celeste",
            "rules": "Timer starts on Begin.",
            "release_date": "January 25, 2018",
            "developer": "EXOK",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Celeste"
        assert data["release_date"] == "2018-01-25"
        assert data["icon_url"] is None

    async def test_create_with_icon_upload(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/games",
            data={"name": "Celeste", "rules": "Any"},
            files={"icon": ("celeste.PNG", b"\x89PNG", "image/png")},
        )
        assert response.status_code == 201
        icon_url = response.json()["icon_url"]
        assert icon_url.startswith("/uploads/")
        assert icon_url.endswith(".png")

    async def test_create_missing_rules(self, client: AsyncClient):
        response = await client.post("/api/v1/games", data={"name": "Celeste"})
        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    async def test_bad_release_date(self, client: AsyncClient):
        response = await client.post("/api/v1/games", data={
            "name": "Celeste", "rules": "Any", "release_date": "sometime in 2018",
        })
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "release_date"

    async def test_search_update_delete(self, client: AsyncClient, factory):
        game = await factory.game("Super Mario 64")

        found = await client.get("/api/v1/games/search", params={"q": "mario"})
        assert [g["id"] for g in found.json()] == [game.id]
        assert (await client.get("/api/v1/games/search", params={"q": "zelda"})).status_code == 404

        updated = await client.patch(f"/api/v1/games/{game.id}", json={"developer": "Nintendo EAD"})
        assert updated.json() == {"message": "Game updated successfully"}
        assert (await client.get(f"/api/v1/games/{game.id}")).json()["developer"] == "Nintendo EAD"

        deleted = await client.delete(f"/api/v1/games/{game.id}")
        assert deleted.json() == {"message": "Game deleted successfully"}
        assert (await client.delete(f"/api/v1/games/{game.id}")).status_code == 404

    async def test_update_unknown_field_rejected(self, client: AsyncClient, factory):
        game = await factory.game()
        response = await client.patch(f"/api/v1/games/{game.id}", json={"id": 99})
        assert response.status_code == 400


class TestVersionsAndCategories:
    async def test_version_crud(self, client: AsyncClient, factory):
        game = await factory.game()

        created = await client.post("/api/v1/versions", json={"game_id": game.id, "name": "v1"})
        assert created.status_code == 201
        version_id = created.json()["id"]

        listed = await client.get(f"/api/v1/versions/games/{game.id}")
        assert [v["id"] for v in listed.json()] == [version_id]

        renamed = await client.patch(f"/api/v1/versions/{version_id}", json={"name": "1.0"})
        assert renamed.json() == {"message": "Game version updated successfully"}
        assert (await client.get(f"/api/v1/versions/{version_id}")).json()["name"] == "1.0"

        assert (await client.delete(f"/api/v1/versions/{version_id}")).status_code == 200
        assert (await client.get(f"/api/v1/versions/games/{game.id}")).json() == []

    async def test_version_for_unknown_game(self, client: AsyncClient):
        response = await client.post("/api/v1/versions", json={"game_id": 999, "name": "v1"})
        assert response.status_code == 400
        assert response.json() == {"message": "Game id is invalid"}
        assert (await client.get("/api/v1/versions/games/999")).status_code == 404

    async def test_category_crud(self, client: AsyncClient, factory):
        game = await factory.game()

        created = await client.post("/api/v1/categories", json={
            "game_id": game.id, "name": "Any%", "description": "Beat the game",
        })
        assert created.status_code == 201
        category_id = created.json()["id"]

        assert [c["name"] for c in (await client.get(f"/api/v1/categories/games/{game.id}")).json()] == ["Any%"]

        patched = await client.patch(f"/api/v1/categories/{category_id}", json={"name": "Any% (No LBLJ)"})
        assert patched.json() == {"message": "Category updated successfully"}

        assert (await client.delete(f"/api/v1/categories/{category_id}")).json() == {
            "message": "Category deleted successfully"
        }
        assert (await client.get(f"/api/v1/categories/{category_id}")).status_code == 404
