"""Categories API: /api/v1/categories/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from speedrun.categories.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from speedrun.categories.service import CategoryService
from speedrun.dependencies import get_category_service

router = APIRouter(prefix="/api/v1/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(service: CategoryService = Depends(get_category_service)) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in await service.list_all()]


@router.get("/games/{game_id}", response_model=list[CategoryResponse])
async def list_categories_for_game(
    game_id: int,
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in await service.list_by_game(game_id)]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return CategoryResponse.model_validate(await service.get_by_id(category_id))


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    return CategoryResponse.model_validate(await service.create(body))


@router.patch("/{category_id}")
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> dict[str, str]:
    if not await service.update(category_id, body):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category updated successfully"}


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> dict[str, str]:
    if not await service.delete(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category deleted successfully"}
