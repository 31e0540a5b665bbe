"""Record categories API: /api/v1/record-categories/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from speedrun.dependencies import get_record_category_service
from speedrun.record_categories.schemas import (
    RecordCategoryCreate,
    RecordCategoryResponse,
    RecordCategoryUpdate,
)
from speedrun.record_categories.service import RecordCategoryService

router = APIRouter(prefix="/api/v1/record-categories", tags=["Record Categories"])


@router.get("", response_model=list[RecordCategoryResponse])
async def list_record_categories(
    service: RecordCategoryService = Depends(get_record_category_service),
) -> list[RecordCategoryResponse]:
    return await service.list_all()


@router.get("/records/{record_id}", response_model=list[RecordCategoryResponse])
async def list_categories_for_record(
    record_id: int,
    service: RecordCategoryService = Depends(get_record_category_service),
) -> list[RecordCategoryResponse]:
    return await service.list_by_record(record_id)


@router.get("/{link_id}", response_model=RecordCategoryResponse)
async def get_record_category(
    link_id: int,
    service: RecordCategoryService = Depends(get_record_category_service),
) -> RecordCategoryResponse:
    return await service.get_by_id(link_id)


@router.post("", response_model=RecordCategoryResponse, status_code=201)
async def create_record_category(
    body: RecordCategoryCreate,
    service: RecordCategoryService = Depends(get_record_category_service),
) -> RecordCategoryResponse:
    return await service.create(body)


@router.patch("/{link_id}")
async def update_record_category(
    link_id: int,
    body: RecordCategoryUpdate,
    service: RecordCategoryService = Depends(get_record_category_service),
) -> dict[str, str]:
    if not await service.update(link_id, body):
        raise HTTPException(status_code=404, detail="Record category not found")
    return {"message": "Record category updated successfully"}


@router.delete("/{link_id}")
async def delete_record_category(
    link_id: int,
    service: RecordCategoryService = Depends(get_record_category_service),
) -> dict[str, str]:
    if not await service.delete(link_id):
        raise HTTPException(status_code=404, detail="Record category not found")
    return {"message": "Record category deleted successfully"}
