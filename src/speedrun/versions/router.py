"""Game versions API: /api/v1/versions/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from speedrun.dependencies import get_version_service
from speedrun.versions.schemas import GameVersionCreate, GameVersionResponse, GameVersionUpdate
from speedrun.versions.service import GameVersionService

router = APIRouter(prefix="/api/v1/versions", tags=["Versions"])


@router.get("", response_model=list[GameVersionResponse])
async def list_versions(
    service: GameVersionService = Depends(get_version_service),
) -> list[GameVersionResponse]:
    return [GameVersionResponse.model_validate(v) for v in await service.list_all()]


@router.get("/games/{game_id}", response_model=list[GameVersionResponse])
async def list_versions_for_game(
    game_id: int,
    service: GameVersionService = Depends(get_version_service),
) -> list[GameVersionResponse]:
    return [GameVersionResponse.model_validate(v) for v in await service.list_by_game(game_id)]


@router.get("/{version_id}", response_model=GameVersionResponse)
async def get_version(
    version_id: int,
    service: GameVersionService = Depends(get_version_service),
) -> GameVersionResponse:
    return GameVersionResponse.model_validate(await service.get_by_id(version_id))


@router.post("", response_model=GameVersionResponse, status_code=201)
async def create_version(
    body: GameVersionCreate,
    service: GameVersionService = Depends(get_version_service),
) -> GameVersionResponse:
    return GameVersionResponse.model_validate(await service.create(body))


@router.patch("/{version_id}")
async def update_version(
    version_id: int,
    body: GameVersionUpdate,
    service: GameVersionService = Depends(get_version_service),
) -> dict[str, str]:
    if not await service.update(version_id, body):
        raise HTTPException(status_code=404, detail="Game version not found")
    return {"message": "Game version updated successfully"}


@router.delete("/{version_id}")
async def delete_version(
    version_id: int,
    service: GameVersionService = Depends(get_version_service),
) -> dict[str, str]:
    if not await service.delete(version_id):
        raise HTTPException(status_code=404, detail="Game version not found")
    return {"message": "Game version deleted successfully"}
