"""Comments API: /api/v1/comments/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from speedrun.comments.schemas import CommentCreate, CommentResponse, CommentUpdate
from speedrun.comments.service import CommentService
from speedrun.dependencies import get_comment_service

router = APIRouter(prefix="/api/v1/comments", tags=["Comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(service: CommentService = Depends(get_comment_service)) -> list[CommentResponse]:
    return [CommentResponse.model_validate(c) for c in await service.list_all()]


@router.get("/records/{record_id}", response_model=list[CommentResponse])
async def list_comments_for_record(
    record_id: int,
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    return [CommentResponse.model_validate(c) for c in await service.list_by_record(record_id)]


@router.get("/users/{user_id}", response_model=list[CommentResponse])
async def list_comments_for_user(
    user_id: int,
    service: CommentService = Depends(get_comment_service),
) -> list[CommentResponse]:
    return [CommentResponse.model_validate(c) for c in await service.list_by_user(user_id)]


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, service: CommentService = Depends(get_comment_service)) -> CommentResponse:
    return CommentResponse.model_validate(await service.get_by_id(comment_id))


@router.post("", response_model=CommentResponse, status_code=201)
async def create_comment(
    body: CommentCreate,
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return CommentResponse.model_validate(await service.create(body))


@router.patch("/{comment_id}")
async def update_comment(
    comment_id: int,
    body: CommentUpdate,
    service: CommentService = Depends(get_comment_service),
) -> dict[str, str]:
    if not await service.update(comment_id, body):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment updated successfully"}


@router.delete("/{comment_id}")
async def delete_comment(comment_id: int, service: CommentService = Depends(get_comment_service)) -> dict[str, str]:
    if not await service.delete(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment deleted successfully"}
