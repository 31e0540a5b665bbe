"""Games API: /api/v1/games/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from speedrun.config import Settings
from speedrun.dependencies import get_game_service, settings_dep
from speedrun.games.schemas import GameCreate, GameResponse, GameUpdate
from speedrun.games.service import GameService
from speedrun.uploads import discard_upload, save_upload
from speedrun.validation import parse_form

router = APIRouter(prefix="/api/v1/games", tags=["Games"])


@router.get("", response_model=list[GameResponse])
async def list_games(service: GameService = Depends(get_game_service)) -> list[GameResponse]:
    return [GameResponse.model_validate(g) for g in await service.list_all()]


@router.get("/search", response_model=list[GameResponse])
async def search_games(
    q: str = Query(..., min_length=1, max_length=255),
    service: GameService = Depends(get_game_service),
) -> list[GameResponse]:
    return [GameResponse.model_validate(g) for g in await service.search(q)]


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: int, service: GameService = Depends(get_game_service)) -> GameResponse:
    return GameResponse.model_validate(await service.get_by_id(game_id))


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(
    name: str = Form(...),
    rules: str = Form(...),
    release_date: str | None = Form(None),
    developer: str | None = Form(None),
    icon_url: str | None = Form(None),
    icon: UploadFile | None = File(None),
    service: GameService = Depends(get_game_service),
    settings: Settings = Depends(settings_dep),
) -> GameResponse:
    """Create a game from a multipart form. An uploaded ``icon`` wins over ``icon_url``."""
    body = parse_form(
        GameCreate,
        name=name,
        rules=rules,
        release_date=release_date,
        developer=developer,
        icon_url=icon_url,
    )
    if icon is None or not icon.filename:
        return GameResponse.model_validate(await service.create(body))

    stored = await save_upload(icon, settings)
    body.icon_url = stored
    try:
        game = await service.create(body)
    except Exception:
        discard_upload(stored, settings)
        raise
    return GameResponse.model_validate(game)


@router.patch("/{game_id}")
async def update_game(
    game_id: int,
    body: GameUpdate,
    service: GameService = Depends(get_game_service),
) -> dict[str, str]:
    if not await service.update(game_id, body):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"message": "Game updated successfully"}


@router.delete("/{game_id}")
async def delete_game(game_id: int, service: GameService = Depends(get_game_service)) -> dict[str, str]:
    if not await service.delete(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"message": "Game deleted successfully"}
